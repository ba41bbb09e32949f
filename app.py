"""CLI toolkit for the university enrollment reporting schema (SQLite + Python).

This script builds the schema, loads the sample rows, and runs the join and
window-function reports as plain SQL text. It uses only the Python standard
library (sqlite3 + argparse); the Django project in this repository exposes the
same reports through the ORM.
"""
from __future__ import annotations

import argparse
import sqlite3
from pathlib import Path
from typing import Iterable, List

DB_PATH = Path("university_enrollment.db")
DEFAULT_SEMESTER = "Fall2025"

SCHEMA_SQL = """
DROP TABLE IF EXISTS enrollments;
DROP TABLE IF EXISTS students;
DROP TABLE IF EXISTS courses;

CREATE TABLE students (
    student_id      INT PRIMARY KEY,
    first_name      VARCHAR(50) NOT NULL,
    last_name       VARCHAR(50) NOT NULL,
    major           VARCHAR(50),
    enrollment_date DATE NOT NULL
);

CREATE TABLE courses (
    course_id       INT PRIMARY KEY,
    course_code     VARCHAR(10) UNIQUE NOT NULL,
    course_name     VARCHAR(100) NOT NULL,
    department      VARCHAR(50) NOT NULL,
    credits         INT NOT NULL CHECK (credits > 0)
);

CREATE TABLE enrollments (
    enrollment_id   INT PRIMARY KEY,
    student_id      INT NOT NULL REFERENCES students(student_id) ON DELETE CASCADE,
    course_id       INT NOT NULL REFERENCES courses(course_id) ON DELETE CASCADE,
    semester        VARCHAR(20) NOT NULL,
    grade           DECIMAL(3,2) CHECK (grade >= 0 AND grade <= 4.0),
    enrollment_date DATE NOT NULL,
    UNIQUE (student_id, course_id, semester)
);

CREATE INDEX IF NOT EXISTS idx_enrollments_student ON enrollments(student_id);
CREATE INDEX IF NOT EXISTS idx_enrollments_course_semester ON enrollments(course_id, semester);
"""

SAMPLE_DATA_SQL = """
INSERT INTO students (student_id, first_name, last_name, major, enrollment_date) VALUES
 (1, 'Alice', 'Johnson', 'Computer Science', '2023-09-01'),
 (2, 'Bob', 'Smith', 'Business', '2023-09-01'),
 (3, 'Charlie', 'Brown', 'Computer Science', '2024-01-15'),
 (4, 'Diana', 'Prince', 'Mathematics', '2023-09-01'),
 (5, 'Ethan', 'Clark', 'Business', '2024-01-15'),
 (6, 'Fiona', 'Green', 'Mathematics', '2023-09-01'),
 (7, 'George', 'Miller', 'Computer Science', '2024-01-15'),
 (8, 'Hannah', 'Davis', NULL, '2023-09-01');

-- PHYS6200 never gets an enrollment
INSERT INTO courses (course_id, course_code, course_name, department, credits) VALUES
 (101, 'INSY8311', 'Database Development', 'Computer Science', 3),
 (102, 'BUSN7501', 'Business Analytics', 'Business', 3),
 (103, 'MATH6101', 'Advanced Calculus', 'Mathematics', 4),
 (104, 'INSY8320', 'Data Warehousing', 'Computer Science', 3),
 (105, 'ECON7100', 'Microeconomics', 'Business', 3),
 (106, 'PHYS6200', 'Quantum Physics', 'Physics', 4);

-- Spring2026 rows are in progress, so they carry no grade yet
INSERT INTO enrollments (enrollment_id, student_id, course_id, semester, grade, enrollment_date) VALUES
 (1, 1, 101, 'Fall2025', 3.8, '2025-09-01'),
 (2, 1, 104, 'Fall2025', 3.5, '2025-09-01'),
 (3, 2, 102, 'Fall2025', 3.2, '2025-09-02'),
 (4, 2, 105, 'Fall2025', 3.9, '2025-09-02'),
 (5, 3, 101, 'Fall2025', 2.8, '2025-09-01'),
 (6, 4, 103, 'Fall2025', 3.7, '2025-09-03'),
 (7, 5, 102, 'Fall2025', 3.0, '2025-09-02'),
 (8, 5, 105, 'Fall2025', 3.4, '2025-09-02'),
 (9, 6, 103, 'Fall2025', 3.6, '2025-09-03'),
 (10, 7, 101, 'Fall2025', 3.1, '2025-09-01'),
 (11, 7, 104, 'Fall2025', 3.3, '2025-09-01'),
 (12, 1, 103, 'Spring2026', NULL, '2026-01-15'),
 (13, 2, 103, 'Spring2026', NULL, '2026-01-15'),
 (14, 3, 102, 'Spring2026', NULL, '2026-01-16'),
 (15, 4, 101, 'Spring2026', NULL, '2026-01-15');
"""

COMPLETE_ENROLLMENTS_SQL = """
SELECT e.enrollment_id,
       s.student_id,
       s.first_name || ' ' || s.last_name AS student_name,
       s.major,
       c.course_code,
       c.course_name,
       e.semester,
       e.grade
FROM enrollments e
INNER JOIN students s ON e.student_id = s.student_id
INNER JOIN courses c ON e.course_id = c.course_id
WHERE e.semester = :semester
ORDER BY e.grade DESC NULLS LAST, e.enrollment_id
"""

UNENROLLED_STUDENTS_SQL = """
SELECT s.student_id,
       s.first_name || ' ' || s.last_name AS student_name,
       s.major,
       s.enrollment_date AS student_enrollment_date
FROM students s
LEFT JOIN enrollments e ON s.student_id = e.student_id
WHERE e.enrollment_id IS NULL
ORDER BY s.student_id
"""

COURSES_WITHOUT_ENROLLMENTS_SQL = """
SELECT c.course_id,
       c.course_code,
       c.course_name,
       c.department,
       c.credits
FROM courses c
LEFT JOIN enrollments e ON e.course_id = c.course_id
WHERE e.enrollment_id IS NULL
ORDER BY c.course_id
"""

# Full outer join of students, enrollments and courses written as a left join
# plus the courses the left join cannot reach.
ENROLLMENT_AUDIT_SQL = """
SELECT student_id,
       course_id,
       COALESCE(CAST(student_id AS TEXT), 'No Student') AS student_info,
       COALESCE(student_name, 'N/A') AS student_name,
       COALESCE(course_code, 'No Course') AS course_info,
       COALESCE(course_name, 'N/A') AS course_name,
       CASE
           WHEN enrollment_id IS NOT NULL THEN 'Enrolled'
           WHEN student_id IS NOT NULL THEN 'Student Not Enrolled'
           WHEN course_id IS NOT NULL THEN 'Course Not Taken'
           ELSE 'No Match'
       END AS status
FROM (
    SELECT s.student_id,
           s.first_name || ' ' || s.last_name AS student_name,
           e.enrollment_id,
           c.course_id,
           c.course_code,
           c.course_name
    FROM students s
    LEFT JOIN enrollments e ON e.student_id = s.student_id
    LEFT JOIN courses c ON c.course_id = e.course_id
    UNION ALL
    SELECT NULL, NULL, NULL, c.course_id, c.course_code, c.course_name
    FROM courses c
    LEFT JOIN enrollments e ON e.course_id = c.course_id
    WHERE e.enrollment_id IS NULL
) AS joined
WHERE student_id IS NULL OR course_id IS NULL OR enrollment_id IS NULL
ORDER BY student_id NULLS LAST, course_id NULLS LAST
"""

PEER_GROUPS_SQL = """
SELECT s1.student_id AS student1_id,
       s1.first_name || ' ' || s1.last_name AS student1_name,
       s2.student_id AS student2_id,
       s2.first_name || ' ' || s2.last_name AS student2_name,
       s1.major,
       s1.enrollment_date
FROM students s1
INNER JOIN students s2
    ON s1.major = s2.major
    AND s1.enrollment_date = s2.enrollment_date
    AND s1.student_id < s2.student_id
WHERE s1.major IS NOT NULL
ORDER BY s1.major, s1.enrollment_date, s1.student_id, s2.student_id
"""

COURSE_RANKINGS_SQL = """
SELECT department,
       course_code,
       course_name,
       enrollment_count,
       ROW_NUMBER() OVER (PARTITION BY department ORDER BY enrollment_count DESC, course_code) AS row_num,
       RANK() OVER (PARTITION BY department ORDER BY enrollment_count DESC) AS rank,
       DENSE_RANK() OVER (PARTITION BY department ORDER BY enrollment_count DESC) AS dense_rank,
       PERCENT_RANK() OVER (PARTITION BY department ORDER BY enrollment_count) AS percent_rank
FROM (
    SELECT c.department,
           c.course_code,
           c.course_name,
           COUNT(e.enrollment_id) AS enrollment_count
    FROM courses c
    LEFT JOIN enrollments e ON c.course_id = e.course_id
    GROUP BY c.course_id, c.department, c.course_code, c.course_name
) AS course_stats
ORDER BY department, enrollment_count DESC, course_code
"""

DEPARTMENT_TRENDS_SQL = """
SELECT semester,
       department,
       enrollment_count,
       SUM(enrollment_count) OVER (
           PARTITION BY department
           ORDER BY semester
           ROWS BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW
       ) AS running_total_rows,
       SUM(enrollment_count) OVER (
           PARTITION BY department
           ORDER BY semester
           RANGE BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW
       ) AS running_total_range,
       AVG(enrollment_count) OVER (
           PARTITION BY department
           ORDER BY semester
           ROWS BETWEEN 1 PRECEDING AND 1 FOLLOWING
       ) AS centered_moving_avg
FROM (
    SELECT e.semester,
           c.department,
           COUNT(e.enrollment_id) AS enrollment_count
    FROM enrollments e
    JOIN courses c ON e.course_id = c.course_id
    GROUP BY e.semester, c.department
) AS dept_enrollments
ORDER BY department, semester
"""

SEMESTER_GROWTH_SQL = """
WITH course_semester_stats AS (
    SELECT c.course_code,
           c.course_name,
           e.semester,
           COUNT(e.enrollment_id) AS enrollments,
           AVG(e.grade) AS avg_grade
    FROM enrollments e
    JOIN courses c ON e.course_id = c.course_id
    WHERE e.grade IS NOT NULL
    GROUP BY c.course_id, c.course_code, c.course_name, e.semester
)
SELECT course_code,
       course_name,
       semester,
       enrollments,
       avg_grade,
       LAG(enrollments, 1) OVER (PARTITION BY course_code ORDER BY semester) AS prev_semester_enrollments,
       enrollments - LAG(enrollments, 1) OVER (PARTITION BY course_code ORDER BY semester) AS enrollment_growth,
       LAG(avg_grade, 1) OVER (PARTITION BY course_code ORDER BY semester) AS prev_semester_avg_grade,
       avg_grade - LAG(avg_grade, 1) OVER (PARTITION BY course_code ORDER BY semester) AS grade_change,
       LEAD(enrollments, 1) OVER (PARTITION BY course_code ORDER BY semester) AS next_semester_enrollments
FROM course_semester_stats
ORDER BY course_code, semester
"""

GPA_QUARTILES_SQL = """
WITH student_gpa AS (
    SELECT s.student_id,
           s.first_name || ' ' || s.last_name AS student_name,
           s.major,
           AVG(e.grade) AS cumulative_gpa,
           COUNT(e.enrollment_id) AS courses_completed
    FROM students s
    JOIN enrollments e ON s.student_id = e.student_id
    WHERE e.grade IS NOT NULL
      AND s.major IS NOT NULL
    GROUP BY s.student_id, s.first_name, s.last_name, s.major
    HAVING COUNT(e.enrollment_id) >= 2
)
SELECT student_id,
       student_name,
       major,
       cumulative_gpa,
       courses_completed,
       NTILE(4) OVER (PARTITION BY major ORDER BY cumulative_gpa DESC) AS performance_quartile,
       CUME_DIST() OVER (PARTITION BY major ORDER BY cumulative_gpa) AS cumulative_distribution,
       CASE NTILE(4) OVER (PARTITION BY major ORDER BY cumulative_gpa DESC)
           WHEN 1 THEN 'Top Performer'
           WHEN 2 THEN 'Above Average'
           WHEN 3 THEN 'Average'
           WHEN 4 THEN 'Needs Improvement'
       END AS performance_segment
FROM student_gpa
ORDER BY major, cumulative_gpa DESC, student_id
"""

COURSE_SEMESTER_TRENDS_SQL = """
SELECT course_code,
       course_name,
       semester,
       semester_enrollments,
       AVG(semester_enrollments) OVER (
           PARTITION BY course_code
           ORDER BY semester
           ROWS BETWEEN 2 PRECEDING AND CURRENT ROW
       ) AS three_semester_moving_avg,
       SUM(semester_enrollments) OVER (
           PARTITION BY course_code
           ORDER BY semester
           ROWS BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW
       ) AS cumulative_enrollments,
       RANK() OVER (PARTITION BY semester ORDER BY semester_enrollments DESC) AS semester_rank
FROM (
    SELECT c.course_code,
           c.course_name,
           e.semester,
           COUNT(e.enrollment_id) AS semester_enrollments
    FROM enrollments e
    JOIN courses c ON e.course_id = c.course_id
    GROUP BY c.course_id, c.course_code, c.course_name, e.semester
) AS course_semester_data
ORDER BY course_code, semester
"""

TABLE_COUNTS_SQL = """
SELECT 'students' AS table_name, COUNT(*) AS record_count FROM students
UNION ALL
SELECT 'courses', COUNT(*) FROM courses
UNION ALL
SELECT 'enrollments', COUNT(*) FROM enrollments
"""

REPORT_SQL = {
    "complete-enrollments": COMPLETE_ENROLLMENTS_SQL,
    "unenrolled-students": UNENROLLED_STUDENTS_SQL,
    "courses-without-enrollments": COURSES_WITHOUT_ENROLLMENTS_SQL,
    "enrollment-audit": ENROLLMENT_AUDIT_SQL,
    "peer-groups": PEER_GROUPS_SQL,
    "course-rankings": COURSE_RANKINGS_SQL,
    "department-trends": DEPARTMENT_TRENDS_SQL,
    "semester-growth": SEMESTER_GROWTH_SQL,
    "gpa-quartiles": GPA_QUARTILES_SQL,
    "course-semester-trends": COURSE_SEMESTER_TRENDS_SQL,
    "table-counts": TABLE_COUNTS_SQL,
}


def connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    # cascading deletes need this on every connection
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def _execute_atomically(conn: sqlite3.Connection, script: str) -> None:
    # executescript commits before it starts, so the transaction lives inside the script
    try:
        conn.executescript(f"BEGIN;\n{script}\nCOMMIT;")
    except sqlite3.Error:
        conn.rollback()
        raise


def init_db(db_path: Path = DB_PATH, with_sample: bool = False) -> None:
    if db_path.exists():
        db_path.unlink()
    conn = connect(db_path)
    try:
        _execute_atomically(conn, SCHEMA_SQL + (SAMPLE_DATA_SQL if with_sample else ""))
    finally:
        conn.close()


def load_sample_data(db_path: Path = DB_PATH) -> None:
    conn = connect(db_path)
    try:
        _execute_atomically(conn, SAMPLE_DATA_SQL)
    finally:
        conn.close()


def run_report(
    conn: sqlite3.Connection, name: str, semester: str = DEFAULT_SEMESTER, limit: int | None = None
) -> List[sqlite3.Row]:
    try:
        query = REPORT_SQL[name]
    except KeyError:
        raise SystemExit(f"Unknown report '{name}'") from None
    if limit is not None and name == "course-rankings":
        query = f"{query.rstrip()}\nLIMIT :limit"
    # named parameters the statement does not use are ignored
    return conn.execute(query, {"semester": semester, "limit": limit}).fetchall()


def print_table(rows: Iterable[sqlite3.Row]) -> None:
    for row in rows:
        print({k: row[k] for k in row.keys()})


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="SQLite demo for the university enrollment reports")
    parser.add_argument(
        "--db", type=Path, default=DB_PATH, help="Path to SQLite database file (default: university_enrollment.db)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create a fresh database with sample data (drops existing)")
    sub.add_parser("seed", help="Load sample data into an existing database")

    report_cmd = sub.add_parser("report", help="Run one of the join or window-function reports")
    report_cmd.add_argument("name", choices=sorted(REPORT_SQL))
    report_cmd.add_argument(
        "--semester", default=DEFAULT_SEMESTER, help="Semester for complete-enrollments (default: Fall2025)"
    )
    report_cmd.add_argument("--limit", type=int, default=None, help="Row limit for course-rankings")

    args = parser.parse_args(argv)
    db_path: Path = args.db

    if args.command == "init-db":
        init_db(db_path, with_sample=True)
        print(f"Created database at {db_path} with sample data.")
        return

    if not db_path.exists():
        raise SystemExit(f"Database {db_path} does not exist. Run init-db first.")

    if args.command == "seed":
        try:
            load_sample_data(db_path)
        except sqlite3.IntegrityError as exc:
            raise SystemExit(f"Sample data already present or conflicting: {exc}") from exc
        print("Sample data inserted.")
        return

    if args.limit is not None and args.limit < 1:
        raise SystemExit("--limit must be a positive integer")

    conn = connect(db_path)
    try:
        rows = run_report(conn, args.name, args.semester, args.limit)
    finally:
        conn.close()
    if rows:
        print_table(rows)
    else:
        print("No rows.")


if __name__ == "__main__":
    main()
