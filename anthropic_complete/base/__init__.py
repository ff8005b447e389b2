"""Base layer: data model, wire DTOs, errors, cancellation, logging, transport, streaming."""
