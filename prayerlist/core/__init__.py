"""Core module for the prayerlist application."""

from .types import APIResponse, FirestoreDocument, PublicProfile

__all__ = ["FirestoreDocument", "APIResponse", "PublicProfile"]
