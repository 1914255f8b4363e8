"""Pure domain services: state machines, authorization guards, policies."""
