"""Contratos (Protocol) que implementan los adaptadores concretos.

El dispatcher depende de estas abstracciones, no de httpx.
"""
