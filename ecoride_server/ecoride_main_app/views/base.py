"""Shared response helpers for service-backed views"""
from rest_framework import status
from rest_framework.response import Response

from ..services import Actor


def error_response(error):
    """Render a RideshareError as {'error', 'code'} with its HTTP status"""
    return Response({'error': error.message, 'code': error.code}, status=error.status_code)


def invalid_input_response(errors):
    return Response(
        {'error': 'Invalid input', 'code': 'validation_failed', 'details': errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def actor_for(request):
    return Actor.from_user(request.user)
