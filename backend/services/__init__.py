"""Application services that sit beside the entity store."""
