"""Deutsche Bahn best price search server"""

__version__ = "1.0.0"
