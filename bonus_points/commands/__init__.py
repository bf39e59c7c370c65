"""
CLI Commands for the bonus points plugin.

Usage:
    flask bonuses list                          # List active bonuses
    flask bonuses create --name "Mug" --points 500
    flask bonuses update mug --points 400
    flask bonuses destroy mug                   # Soft delete, frees the slug
    flask bonuses restore 12                    # Undo a soft delete
    flask bonuses purge 12                      # Hard delete
    flask bonuses add-image mug https://cdn.example.com/mug.png
"""
from .bonuses import init_app as init_bonus_commands


def init_app(app):
    """Register all CLI commands with the Flask app."""
    init_bonus_commands(app)
