"""
lookglass CLI - Command-line interface for the lookglass engine.

Usage:
    lookglass trace levels/first_reflection.yaml
    lookglass unfold levels/corner_pocket.yaml --degrees 30
    lookglass render levels/corner_pocket.yaml --output ./runs/demo
    lookglass levels levels/
"""

__version__ = "0.1.0"
