from .resources import ApiResponse, ModelT, Movie, Quote, WireModel

__all__ = ["ApiResponse", "ModelT", "Movie", "Quote", "WireModel"]
