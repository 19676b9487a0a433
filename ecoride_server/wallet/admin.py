from django.contrib import admin

from .models import CreditTransaction


@admin.register(CreditTransaction)
class CreditTransactionAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'transaction_type', 'title', 'amount', 'reference_id', 'timestamp']
    list_filter = ['transaction_type', 'title', 'timestamp']
    search_fields = ['user__username', 'reference_id', 'description']
    ordering = ['-timestamp']
    readonly_fields = ['user', 'transaction_type', 'title', 'amount', 'reference_id', 'description', 'timestamp']
    list_per_page = 50

    def has_add_permission(self, request):
        return False
