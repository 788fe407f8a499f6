"""UPI transaction fraud risk engine."""
