"""Service Layer — orchestrates core logic around infrastructure calls."""
