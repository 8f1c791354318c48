from . import csv

__all__ = ["csv"]
