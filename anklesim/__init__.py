"""
AnkleSim: standing postural stability of the ankle with Hill-type muscles.
"""

__version__ = "0.1.0"
