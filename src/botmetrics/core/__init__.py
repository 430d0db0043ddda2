"""Pure domain logic: models, extraction, classification and translation."""
