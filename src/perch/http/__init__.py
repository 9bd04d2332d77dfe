"""HTTP types: immutable Request and Response."""

from perch.http.headers import Headers
from perch.http.request import Request
from perch.http.response import Response

__all__ = ["Headers", "Request", "Response"]
