"""Dominio: descriptor de petición y resultado tipado.

Sin dependencias de HTTP ni de la CLI; solo conceptos de acortar/resolver URLs.
"""
