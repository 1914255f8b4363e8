"""Infrastructure layer: stubs, adapters and observability."""
