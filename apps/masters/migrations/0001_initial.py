import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Member',
            fields=[
                ('id', models.CharField(editable=False, max_length=20, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('short_name', models.CharField(blank=True, max_length=50)),
                ('order', models.IntegerField(default=999)),
                ('primary_flg', models.BooleanField(default=False)),
                ('display_flag', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'members',
                'ordering': ['order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.CharField(editable=False, max_length=20, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('short_name', models.CharField(blank=True, max_length=100)),
                ('display_flag', models.BooleanField(default=True, null=True)),
                ('release_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'products',
                'ordering': ['-id'],
                'indexes': [models.Index(fields=['release_date'], name='products_release_a1c2f4_idx')],
            },
        ),
        migrations.CreateModel(
            name='Shop',
            fields=[
                ('id', models.CharField(editable=False, max_length=20, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('short_name', models.CharField(blank=True, max_length=100)),
                ('order', models.IntegerField(default=999)),
                ('display_flag', models.BooleanField(default=True)),
                ('address', models.CharField(blank=True, max_length=300)),
                ('apply_start_days', models.IntegerField(blank=True, null=True)),
                ('apply_start_time', models.TimeField(blank=True, null=True)),
                ('apply_end_days', models.IntegerField(blank=True, null=True)),
                ('apply_end_time', models.TimeField(blank=True, null=True)),
                ('result_days', models.IntegerField(blank=True, null=True)),
                ('result_time', models.TimeField(blank=True, null=True)),
                ('purchase_start_days', models.IntegerField(blank=True, null=True)),
                ('purchase_start_time', models.TimeField(blank=True, null=True)),
                ('purchase_end_days', models.IntegerField(blank=True, null=True)),
                ('purchase_end_time', models.TimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'shops',
                'ordering': ['order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='ProductRelation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('code', models.CharField(max_length=50)),
                ('name', models.CharField(blank=True, max_length=200)),
                ('short_name', models.CharField(blank=True, max_length=100)),
                ('unit_price', models.PositiveIntegerField(default=0)),
                ('quantity', models.PositiveIntegerField(default=0)),
                ('amount', models.PositiveIntegerField(default=0)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='relations', to='masters.product')),
            ],
            options={
                'db_table': 'product_relations',
                'ordering': ['product', 'position'],
            },
        ),
    ]
