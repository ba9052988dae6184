# cubemap/__init__.py
from .cubemap import Cubemap, Face, Geometry
