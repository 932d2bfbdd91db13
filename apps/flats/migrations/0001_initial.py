# Generated manually for the initial flats schema

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Flat',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='owned_flats', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'flats',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['owner', 'created_at'], name='flats_owner_created_idx')],
            },
        ),
        migrations.CreateModel(
            name='FlatMembership',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('role', models.CharField(choices=[('owner', 'Owner'), ('member', 'Member')], default='member', max_length=20)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('flat', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='flats.flat')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='flat_memberships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'flat_memberships',
                'ordering': ['joined_at'],
                'indexes': [
                    models.Index(fields=['flat', 'role'], name='flat_memb_flat_role_idx'),
                    models.Index(fields=['user', 'joined_at'], name='flat_memb_user_joined_idx'),
                ],
                'unique_together': {('user', 'flat')},
            },
        ),
    ]
