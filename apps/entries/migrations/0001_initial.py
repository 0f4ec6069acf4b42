import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('masters', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Entry',
            fields=[
                ('id', models.CharField(editable=False, max_length=20, primary_key=True, serialize=False)),
                ('shop_short_name', models.CharField(blank=True, max_length=100)),
                ('status', models.IntegerField(choices=[(0, '未応募'), (9, '対象外'), (10, '応募中'), (20, '応募済'), (30, '当選'), (40, '購入済'), (99, '落選')], db_index=True, default=0)),
                ('apply_method', models.IntegerField(blank=True, null=True)),
                ('apply_start', models.DateTimeField(blank=True, null=True)),
                ('apply_end', models.DateTimeField(blank=True, null=True)),
                ('result_date', models.DateTimeField(blank=True, null=True)),
                ('purchase_start', models.DateTimeField(blank=True, null=True)),
                ('purchase_end', models.DateTimeField(blank=True, null=True)),
                ('purchase_date', models.DateTimeField(blank=True, null=True)),
                ('url', models.URLField(blank=True, max_length=500)),
                ('memo', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entries', to='masters.product')),
            ],
            options={
                'db_table': 'entries',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'entries',
                'indexes': [models.Index(fields=['product', 'status'], name='entries_product_5b0e7d_idx')],
            },
        ),
        migrations.CreateModel(
            name='PurchaseMember',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('member_id', models.CharField(max_length=20)),
                ('name', models.CharField(blank=True, max_length=100)),
                ('status', models.IntegerField(choices=[(0, '未応募'), (9, '対象外'), (10, '応募中'), (20, '応募済'), (30, '当選'), (40, '購入済'), (99, '落選')], default=0)),
                ('entry', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='purchase_members', to='entries.entry')),
            ],
            options={
                'db_table': 'purchase_members',
                'ordering': ['entry', 'member_id'],
                'unique_together': {('entry', 'member_id')},
            },
        ),
        migrations.CreateModel(
            name='PurchaseItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=50)),
                ('short_name', models.CharField(blank=True, max_length=100)),
                ('quantity', models.PositiveIntegerField()),
                ('amount', models.PositiveIntegerField(default=0)),
                ('purchase_member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='entries.purchasemember')),
            ],
            options={
                'db_table': 'purchase_items',
                'ordering': ['purchase_member', 'id'],
            },
        ),
    ]
