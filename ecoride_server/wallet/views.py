from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework.generics import get_object_or_404

from ecoride_main_app.models import Profile
from .models import CreditTransaction
from .serializers import BalanceSerializer, CreditTransactionSerializer


class WalletView(viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated]
    authentication_classes = [JWTAuthentication]
    serializer_class = BalanceSerializer

    def list(self, request, *args, **kwargs):
        profile = get_object_or_404(Profile, user=self.request.user)
        serializer = self.get_serializer(profile)
        return Response(serializer.data, status=status.HTTP_200_OK)


class CreditTransactionView(viewsets.ReadOnlyModelViewSet):
    """Credit ledger of the current user; entries are written only by wallet.services"""
    serializer_class = CreditTransactionSerializer
    permission_classes = [IsAuthenticated]
    authentication_classes = [JWTAuthentication]

    def get_queryset(self):
        return CreditTransaction.objects.filter(user=self.request.user.id)
