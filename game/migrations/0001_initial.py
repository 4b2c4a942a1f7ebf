from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyPuzzle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField(unique=True)),
                ('seed', models.CharField(max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('row_1', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.show')),
                ('row_2', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.show')),
                ('row_3', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.show')),
                ('col_1', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.show')),
                ('col_2', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.show')),
                ('col_3', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.show')),
            ],
            options={
                'ordering': ['-date'],
            },
        ),
        migrations.CreateModel(
            name='DailyCell',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('row_idx', models.PositiveSmallIntegerField()),
                ('col_idx', models.PositiveSmallIntegerField()),
                ('answer_count', models.PositiveIntegerField()),
                ('puzzle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cells', to='game.dailypuzzle')),
            ],
            options={
                'ordering': ['row_idx', 'col_idx'],
            },
        ),
        migrations.AddConstraint(
            model_name='dailycell',
            constraint=models.UniqueConstraint(fields=('puzzle', 'row_idx', 'col_idx'), name='unique_puzzle_cell'),
        ),
    ]
