"""Cross-cutting primitives: request context, path walking."""
