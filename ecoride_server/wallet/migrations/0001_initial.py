# Initial schema for the credit ledger

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CreditTransaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('transaction_type', models.CharField(choices=[('credit', 'credit'), ('debit', 'debit')], max_length=10)),
                ('amount', models.PositiveIntegerField()),
                ('title', models.CharField(choices=[('signup', 'Signup bonus'), ('booking', 'Ride booking'), ('refund', 'Refund'), ('ride_fee', 'Platform ride fee'), ('adjustment', 'Manual adjustment')], default='adjustment', max_length=16)),
                ('description', models.TextField(blank=True, max_length=150)),
                ('reference_id', models.CharField(default='unknown', max_length=64)),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='credit_transactions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-timestamp'],
                'indexes': [models.Index(fields=['title', 'timestamp'], name='credit_title_timestamp_idx')],
            },
        ),
    ]
