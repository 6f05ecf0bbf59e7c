"""Pure domain logic: categories, validation rules, and record models."""
