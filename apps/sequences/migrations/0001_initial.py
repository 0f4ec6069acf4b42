from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='SequenceCounter',
            fields=[
                ('seq_type', models.CharField(choices=[('member', 'Member'), ('product', 'Product'), ('shop', 'Shop'), ('entry', 'Entry')], max_length=20, primary_key=True, serialize=False)),
                ('seq', models.PositiveIntegerField(default=1)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'seq_management',
                'ordering': ['seq_type'],
            },
        ),
    ]
