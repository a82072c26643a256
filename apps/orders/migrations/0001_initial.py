# Generated manually for orders app

import uuid
from decimal import Decimal
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_number', models.CharField(editable=False, max_length=32, unique=True)),
                ('franchise_id', models.CharField(blank=True, max_length=64)),
                ('franchise_name', models.CharField(blank=True, max_length=200)),
                ('vendor_id', models.CharField(blank=True, max_length=64)),
                ('vendor_name', models.CharField(blank=True, max_length=200)),
                ('status', models.CharField(choices=[('PLACED', 'Placed'), ('ACCEPTED', 'Accepted'), ('DISPATCHED', 'Dispatched'), ('RECEIVED', 'Received')], default='PLACED', max_length=20)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('total_vendor_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.CharField(max_length=64)),
                ('created_by_name', models.CharField(blank=True, max_length=200)),
                ('created_by_role', models.CharField(blank=True, max_length=20)),
                ('created_by_employee_id', models.CharField(blank=True, max_length=50)),
                ('accepted_at', models.DateTimeField(blank=True, null=True)),
                ('accepted_by', models.CharField(blank=True, max_length=64)),
                ('accepted_by_name', models.CharField(blank=True, max_length=200)),
                ('dispatched_at', models.DateTimeField(blank=True, null=True)),
                ('dispatched_by', models.CharField(blank=True, max_length=64)),
                ('dispatched_by_name', models.CharField(blank=True, max_length=200)),
                ('dispatch_photos', models.JSONField(blank=True, default=list)),
                ('dispatch_notes', models.TextField(blank=True)),
                ('received_at', models.DateTimeField(blank=True, null=True)),
                ('received_by', models.CharField(blank=True, max_length=64)),
                ('received_by_name', models.CharField(blank=True, max_length=200)),
                ('receive_photos', models.JSONField(blank=True, default=list)),
                ('received_items', models.JSONField(blank=True, null=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'supply_orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['franchise_id', 'created_at'], name='order_franchise_created_idx'),
                    models.Index(fields=['vendor_id', 'created_at'], name='order_vendor_created_idx'),
                    models.Index(fields=['status', 'received_at'], name='order_status_received_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderLine',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('item_id', models.CharField(blank=True, max_length=64)),
                ('item_name', models.CharField(blank=True, max_length=200)),
                ('ordered_qty', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('uom', models.CharField(blank=True, max_length=20)),
                ('unit_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('vendor_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('line_total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('vendor_cost_line', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('position', models.PositiveIntegerField(default=0)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='orders.order')),
            ],
            options={
                'db_table': 'supply_order_items',
                'ordering': ['position'],
            },
        ),
    ]
