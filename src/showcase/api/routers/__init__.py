"""HTTP routers, one module per resource plus auth and health."""
