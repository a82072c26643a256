# Generated manually for notifications app

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('user_id', models.CharField(max_length=64)),
                ('type', models.CharField(choices=[('ORDER_NEW', 'New order'), ('ORDER_STATUS', 'Order status'), ('DISCREPANCY_NEW', 'Discrepancy reported'), ('DISCREPANCY_RESOLVED', 'Discrepancy resolved')], max_length=30)),
                ('title', models.CharField(max_length=200)),
                ('message', models.TextField(blank=True)),
                ('link', models.CharField(blank=True, max_length=300)),
                ('reference_id', models.CharField(blank=True, max_length=64)),
                ('is_read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'supply_notifications',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user_id', 'is_read', 'created_at'], name='notification_inbox_idx'),
                ],
            },
        ),
    ]
