"""Request-scoped access to the process-wide service instance."""

from fastapi import Request

from service import I9Service


def get_service(request: Request) -> I9Service:
    return request.app.state.service
