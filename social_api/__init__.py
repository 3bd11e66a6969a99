"""Realtime notification backend for the social platform.

The package is split the same way the rest of the service is: ``domain``
holds plain dataclasses, ``infrastructure`` talks to the database and the
websocket transport, ``application`` hosts the use cases and ``interfaces``
exposes them over HTTP.
"""
