"""Provider adapters: embeddings, vector DB and HTTP transport."""
