"""fintrack - ядро учёта личных финансов"""

__version__ = "1.0.0"
