from rest_framework import serializers
from .models import CreditTransaction


class BalanceSerializer(serializers.Serializer):
    user = serializers.IntegerField(source='user_id', read_only=True)
    balance = serializers.IntegerField(source='credits', read_only=True)


class CreditTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = CreditTransaction
        fields = ['id', 'title', 'description', 'reference_id', 'transaction_type', 'amount', 'timestamp']
