"""
CV portal chat backend.

Retrieval-augmented chat over a parsed CV: chunking, embedding, vector
search, confidence scoring and cited responses.
"""
