"""Models package - Re-exports all models for convenient importing."""
from design_tracker.extensions import db
from design_tracker.models.user import User
from design_tracker.models.design_request import DesignRequest

__all__ = ['db', 'User', 'DesignRequest']
