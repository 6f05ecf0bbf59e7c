"""Infrastructure adapters: document store, prompts, and template loading."""
