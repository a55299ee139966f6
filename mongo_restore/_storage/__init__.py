from .mongo import MongoStorage

__all__ = ["MongoStorage"]
