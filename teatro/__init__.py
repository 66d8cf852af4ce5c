"""
Teatro Recife API - бэкенд продажи билетов и аренды залов
"""

__version__ = "1.0.0"
