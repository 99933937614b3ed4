"""Services: provider API access and enablement logic."""
