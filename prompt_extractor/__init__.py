"""Extract user prompts from exported AI conversation archives"""

__version__ = "0.1.0"
