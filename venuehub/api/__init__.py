"""HTTP API: versioned routers and the WebSocket manager."""
