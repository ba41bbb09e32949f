"""Django models for the university enrollment reporting domain."""
from __future__ import annotations

from django.db import models
from django.db.models import Q


class Student(models.Model):
    student_id = models.IntegerField("Student ID", primary_key=True)
    first_name = models.CharField("First name", max_length=50)
    last_name = models.CharField("Last name", max_length=50)
    major = models.CharField("Declared major", max_length=50, null=True, blank=True)
    enrollment_date = models.DateField("Admission date")

    class Meta:
        db_table = "students"
        verbose_name = "Student"
        verbose_name_plural = "Students"
        ordering = ["student_id"]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.full_name} ({self.student_id})"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Course(models.Model):
    course_id = models.IntegerField("Course ID", primary_key=True)
    course_code = models.CharField("Course code", max_length=10, unique=True)
    course_name = models.CharField("Course name", max_length=100)
    department = models.CharField("Department", max_length=50)
    credits = models.IntegerField("Credits")

    class Meta:
        db_table = "courses"
        verbose_name = "Course"
        verbose_name_plural = "Courses"
        ordering = ["course_code"]
        constraints = [
            models.CheckConstraint(
                condition=Q(credits__gt=0),
                name="course_credits_positive",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.course_code} - {self.course_name}"


class Enrollment(models.Model):
    enrollment_id = models.IntegerField("Enrollment ID", primary_key=True)
    student = models.ForeignKey(Student, on_delete=models.DB_CASCADE, related_name="enrollments", verbose_name="Student")
    course = models.ForeignKey(Course, on_delete=models.DB_CASCADE, related_name="enrollments", verbose_name="Course")
    semester = models.CharField("Semester", max_length=20)
    # NULL while the course is still in progress
    grade = models.DecimalField("Grade", max_digits=3, decimal_places=2, null=True, blank=True)
    enrollment_date = models.DateField("Enrollment date")

    class Meta:
        db_table = "enrollments"
        verbose_name = "Enrollment"
        verbose_name_plural = "Enrollments"
        ordering = ["enrollment_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "course", "semester"],
                name="enrollment_unique_student_course_semester",
            ),
            models.CheckConstraint(
                condition=Q(grade__isnull=True) | Q(grade__gte=0, grade__lte=4),
                name="enrollment_grade_range",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - human readable labels
        return f"{self.student_id} -> {self.course_id} ({self.semester})"

    @property
    def is_completed(self) -> bool:
        return self.grade is not None


# Read-only models over the aggregate views created in migration 0002. Window
# functions in ``enrollments.reports`` run over these plain columns.


class CourseEnrollmentStats(models.Model):
    """Enrollment count per course, zero for courses nobody took."""

    course_id = models.IntegerField(primary_key=True)
    course_code = models.CharField(max_length=10)
    course_name = models.CharField(max_length=100)
    department = models.CharField(max_length=50)
    enrollment_count = models.IntegerField()

    class Meta:
        managed = False
        db_table = "course_enrollment_stats"


class DepartmentSemesterStats(models.Model):
    """Enrollment count per department and semester."""

    stats_key = models.CharField(max_length=80, primary_key=True)
    department = models.CharField(max_length=50)
    semester = models.CharField(max_length=20)
    enrollment_count = models.IntegerField()

    class Meta:
        managed = False
        db_table = "department_semester_stats"


class CourseSemesterStats(models.Model):
    """Enrollment count, graded count and average grade per course and semester."""

    stats_key = models.CharField(max_length=40, primary_key=True)
    course_id = models.IntegerField()
    course_code = models.CharField(max_length=10)
    course_name = models.CharField(max_length=100)
    semester = models.CharField(max_length=20)
    enrollment_count = models.IntegerField()
    graded_count = models.IntegerField()
    avg_grade = models.FloatField(null=True)

    class Meta:
        managed = False
        db_table = "course_semester_stats"


class StudentGpa(models.Model):
    """Cumulative GPA of students with a declared major and two or more graded courses."""

    student_id = models.IntegerField(primary_key=True)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    major = models.CharField(max_length=50)
    cumulative_gpa = models.FloatField()
    courses_completed = models.IntegerField()

    class Meta:
        managed = False
        db_table = "student_gpa"
