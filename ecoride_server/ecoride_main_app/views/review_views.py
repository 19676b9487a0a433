"""Review views using ReviewService"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..exceptions import RideshareError
from ..models import DriverReview
from ..permissions import IsStaffMember
from ..serializers import (
    DriverReviewSerializer,
    ReviewSubmitSerializer,
    ModerationSerializer,
    ProblematicRideSerializer,
)
from ..services import ReviewService
from .base import error_response, invalid_input_response, actor_for


class DriverReviewViewSet(viewsets.GenericViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = DriverReviewSerializer
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        if self.action in ['pending', 'moderate', 'problematic']:
            return [IsAuthenticated(), IsStaffMember()]
        return super().get_permissions()

    def get_queryset(self):
        return DriverReview.objects.filter(
            reviewer=self.request.user
        ).select_related('reviewer__profile', 'driver__profile', 'ride').order_by('-created_at')

    def list(self, request):
        """Reviews written by the current user"""
        return Response(self.get_serializer(self.get_queryset(), many=True).data, status=status.HTTP_200_OK)

    def create(self, request):
        serializer = ReviewSubmitSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            review, created = ReviewService().submit_review(actor_for(request), **serializer.validated_data)
        except RideshareError as e:
            return error_response(e)
        return Response(
            self.get_serializer(review).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @action(detail=False, methods=['get'], url_path=r'driver/(?P<driver_id>\d+)')
    def driver(self, request, driver_id=None):
        """Approved reviews of a driver"""
        reviews = ReviewService().driver_reviews(int(driver_id))
        return Response(self.get_serializer(reviews, many=True).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='pending')
    def pending(self, request):
        try:
            reviews = ReviewService().pending_reviews(actor_for(request))
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(reviews, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='moderate')
    def moderate(self, request, pk=None):
        serializer = ModerationSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            review = ReviewService().moderate_review(actor_for(request), pk, serializer.validated_data['decision'])
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(review).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='problematic')
    def problematic(self, request):
        """Rides that passengers reported as having gone badly"""
        try:
            reviews = ReviewService().problematic_rides(actor_for(request))
        except RideshareError as e:
            return error_response(e)
        return Response(ProblematicRideSerializer(reviews, many=True).data, status=status.HTTP_200_OK)


__all__ = ['DriverReviewViewSet']
