"""Request/response schemas for the portal and the upstream REST API."""
