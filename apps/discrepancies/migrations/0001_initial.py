# Generated manually for discrepancies app

import uuid
from decimal import Decimal
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('orders', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Discrepancy',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_number', models.CharField(blank=True, max_length=32)),
                ('franchise_id', models.CharField(blank=True, max_length=64)),
                ('franchise_name', models.CharField(blank=True, max_length=200)),
                ('item_name', models.CharField(max_length=200)),
                ('ordered_qty', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('received_qty', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('difference', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('uom', models.CharField(blank=True, max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('reported_by', models.CharField(max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('resolved', models.BooleanField(default=False)),
                ('resolved_by', models.CharField(blank=True, max_length=64)),
                ('resolved_at', models.DateTimeField(blank=True, null=True)),
                ('resolution_notes', models.TextField(blank=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='discrepancies', to='orders.order')),
            ],
            options={
                'db_table': 'supply_discrepancies',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'discrepancies',
                'indexes': [
                    models.Index(fields=['order', 'resolved'], name='discrepancy_order_open_idx'),
                    models.Index(fields=['franchise_id', 'created_at'], name='discrepancy_franchise_idx'),
                ],
            },
        ),
    ]
