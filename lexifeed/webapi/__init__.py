"""FastAPI surface exposing vocabulary, translation and feed services."""
