from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("student_id", models.IntegerField(primary_key=True, serialize=False, verbose_name="Student ID")),
                ("first_name", models.CharField(max_length=50, verbose_name="First name")),
                ("last_name", models.CharField(max_length=50, verbose_name="Last name")),
                ("major", models.CharField(blank=True, max_length=50, null=True, verbose_name="Declared major")),
                ("enrollment_date", models.DateField(verbose_name="Admission date")),
            ],
            options={
                "verbose_name": "Student",
                "verbose_name_plural": "Students",
                "db_table": "students",
                "ordering": ["student_id"],
            },
        ),
        migrations.CreateModel(
            name="Course",
            fields=[
                ("course_id", models.IntegerField(primary_key=True, serialize=False, verbose_name="Course ID")),
                ("course_code", models.CharField(max_length=10, unique=True, verbose_name="Course code")),
                ("course_name", models.CharField(max_length=100, verbose_name="Course name")),
                ("department", models.CharField(max_length=50, verbose_name="Department")),
                ("credits", models.IntegerField(verbose_name="Credits")),
            ],
            options={
                "verbose_name": "Course",
                "verbose_name_plural": "Courses",
                "db_table": "courses",
                "ordering": ["course_code"],
            },
        ),
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("enrollment_id", models.IntegerField(primary_key=True, serialize=False, verbose_name="Enrollment ID")),
                ("semester", models.CharField(max_length=20, verbose_name="Semester")),
                (
                    "grade",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=3, null=True, verbose_name="Grade"),
                ),
                ("enrollment_date", models.DateField(verbose_name="Enrollment date")),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.DB_CASCADE,
                        related_name="enrollments",
                        to="enrollments.student",
                        verbose_name="Student",
                    ),
                ),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.DB_CASCADE,
                        related_name="enrollments",
                        to="enrollments.course",
                        verbose_name="Course",
                    ),
                ),
            ],
            options={
                "verbose_name": "Enrollment",
                "verbose_name_plural": "Enrollments",
                "db_table": "enrollments",
                "ordering": ["enrollment_id"],
            },
        ),
        migrations.AddConstraint(
            model_name="course",
            constraint=models.CheckConstraint(
                condition=models.Q(credits__gt=0),
                name="course_credits_positive",
            ),
        ),
        migrations.AddConstraint(
            model_name="enrollment",
            constraint=models.UniqueConstraint(
                fields=("student", "course", "semester"),
                name="enrollment_unique_student_course_semester",
            ),
        ),
        migrations.AddConstraint(
            model_name="enrollment",
            constraint=models.CheckConstraint(
                condition=models.Q(("grade__isnull", True), models.Q(("grade__gte", 0), ("grade__lte", 4)), _connector="OR"),
                name="enrollment_grade_range",
            ),
        ),
    ]
