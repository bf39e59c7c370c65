"""
HTTP blueprints for the bonus points plugin.
"""
