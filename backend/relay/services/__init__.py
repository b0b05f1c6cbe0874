"""Services Layer — multi-step relay logic kept out of the route handlers."""
