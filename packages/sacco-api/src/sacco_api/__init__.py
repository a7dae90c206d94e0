"""HTTP surface for Village SACCO transfers and Bitnob webhooks."""
