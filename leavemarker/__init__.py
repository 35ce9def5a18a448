"""
LeaveMarker client: session & entitlement layer over the LeaveMarker REST API.

    from leavemarker.container import build_container
"""

__version__ = "0.1.0"
