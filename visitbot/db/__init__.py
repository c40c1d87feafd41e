"""Database engine, session factory, and Redis client."""
