"""Errors raised by the pricing engine"""
# pyright: reportUnusedImport=false

from .errors import ConvergenceError, DomainError
