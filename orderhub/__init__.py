"""Order notification service package initializer.

Ensures the local ``orderhub`` package is resolved as a regular package so the
layered subpackages (``domain``, ``application``, ``infrastructure`` and
``interfaces``) are always imported from this project.
"""
