from django.db import migrations, models

COURSE_ENROLLMENT_STATS_SQL = """
CREATE VIEW course_enrollment_stats AS
SELECT c.course_id,
       c.course_code,
       c.course_name,
       c.department,
       COUNT(e.enrollment_id) AS enrollment_count
FROM courses c
LEFT JOIN enrollments e ON e.course_id = c.course_id
GROUP BY c.course_id, c.course_code, c.course_name, c.department
"""

DEPARTMENT_SEMESTER_STATS_SQL = """
CREATE VIEW department_semester_stats AS
SELECT c.department || '/' || e.semester AS stats_key,
       c.department,
       e.semester,
       COUNT(e.enrollment_id) AS enrollment_count
FROM enrollments e
JOIN courses c ON c.course_id = e.course_id
GROUP BY c.department, e.semester
"""

COURSE_SEMESTER_STATS_SQL = """
CREATE VIEW course_semester_stats AS
SELECT CAST(c.course_id AS VARCHAR(20)) || '/' || e.semester AS stats_key,
       c.course_id,
       c.course_code,
       c.course_name,
       e.semester,
       COUNT(e.enrollment_id) AS enrollment_count,
       COUNT(e.grade) AS graded_count,
       CAST(AVG(e.grade) AS DOUBLE PRECISION) AS avg_grade
FROM enrollments e
JOIN courses c ON c.course_id = e.course_id
GROUP BY c.course_id, c.course_code, c.course_name, e.semester
"""

STUDENT_GPA_SQL = """
CREATE VIEW student_gpa AS
SELECT s.student_id,
       s.first_name,
       s.last_name,
       s.major,
       CAST(AVG(e.grade) AS DOUBLE PRECISION) AS cumulative_gpa,
       COUNT(e.enrollment_id) AS courses_completed
FROM students s
JOIN enrollments e ON e.student_id = s.student_id
WHERE e.grade IS NOT NULL
  AND s.major IS NOT NULL
GROUP BY s.student_id, s.first_name, s.last_name, s.major
HAVING COUNT(e.enrollment_id) >= 2
"""


class Migration(migrations.Migration):

    dependencies = [
        ("enrollments", "0001_initial"),
    ]

    operations = [
        migrations.RunSQL(COURSE_ENROLLMENT_STATS_SQL, reverse_sql="DROP VIEW IF EXISTS course_enrollment_stats"),
        migrations.RunSQL(DEPARTMENT_SEMESTER_STATS_SQL, reverse_sql="DROP VIEW IF EXISTS department_semester_stats"),
        migrations.RunSQL(COURSE_SEMESTER_STATS_SQL, reverse_sql="DROP VIEW IF EXISTS course_semester_stats"),
        migrations.RunSQL(STUDENT_GPA_SQL, reverse_sql="DROP VIEW IF EXISTS student_gpa"),
        migrations.CreateModel(
            name="CourseEnrollmentStats",
            fields=[
                ("course_id", models.IntegerField(primary_key=True, serialize=False)),
                ("course_code", models.CharField(max_length=10)),
                ("course_name", models.CharField(max_length=100)),
                ("department", models.CharField(max_length=50)),
                ("enrollment_count", models.IntegerField()),
            ],
            options={
                "db_table": "course_enrollment_stats",
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="DepartmentSemesterStats",
            fields=[
                ("stats_key", models.CharField(max_length=80, primary_key=True, serialize=False)),
                ("department", models.CharField(max_length=50)),
                ("semester", models.CharField(max_length=20)),
                ("enrollment_count", models.IntegerField()),
            ],
            options={
                "db_table": "department_semester_stats",
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="CourseSemesterStats",
            fields=[
                ("stats_key", models.CharField(max_length=40, primary_key=True, serialize=False)),
                ("course_id", models.IntegerField()),
                ("course_code", models.CharField(max_length=10)),
                ("course_name", models.CharField(max_length=100)),
                ("semester", models.CharField(max_length=20)),
                ("enrollment_count", models.IntegerField()),
                ("graded_count", models.IntegerField()),
                ("avg_grade", models.FloatField(null=True)),
            ],
            options={
                "db_table": "course_semester_stats",
                "managed": False,
            },
        ),
        migrations.CreateModel(
            name="StudentGpa",
            fields=[
                ("student_id", models.IntegerField(primary_key=True, serialize=False)),
                ("first_name", models.CharField(max_length=50)),
                ("last_name", models.CharField(max_length=50)),
                ("major", models.CharField(max_length=50)),
                ("cumulative_gpa", models.FloatField()),
                ("courses_completed", models.IntegerField()),
            ],
            options={
                "db_table": "student_gpa",
                "managed": False,
            },
        ),
    ]
