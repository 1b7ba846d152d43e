"""Application layer: use-case services and their result DTOs."""
