"""Infrastructure: Firestore, cache, security."""
