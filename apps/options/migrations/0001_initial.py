from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='OptionItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('list_code', models.CharField(choices=[('OP002', 'Entry status'), ('OP003', 'Apply method')], db_index=True, max_length=10)),
                ('code', models.IntegerField()),
                ('name', models.CharField(max_length=100)),
                ('order', models.IntegerField(default=999)),
            ],
            options={
                'db_table': 'option_items',
                'ordering': ['list_code', 'order', 'code'],
                'unique_together': {('list_code', 'code')},
            },
        ),
    ]
