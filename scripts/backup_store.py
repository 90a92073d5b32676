"""Write every stored course to a JSON file in the "all courses" import format.

Usage: python scripts/backup_store.py [output-path]
The default output is data/all-courses.json next to the database.
"""
import os
import sys

from gradegoal.database.database import DB_DIR, init_db
from gradegoal.database.repository import SqlStateRepository
from gradegoal.services.course_store import CourseStore
from gradegoal.services.grade_calculator import compute
from gradegoal.services.transfer_service import export_all
from gradegoal.utils.helpers import format_pct
from gradegoal.utils.logging_config import configure_logging


def main():
    configure_logging()
    init_db()

    store = CourseStore(SqlStateRepository()).load()
    filename, text = export_all(store.courses)
    out_path = sys.argv[1] if len(sys.argv) > 1 else os.path.join(DB_DIR, filename)

    os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(text)

    print(f"Wrote {len(store.courses)} courses to {out_path}")
    for course in store.courses:
        results = compute(course)
        print(f"  {course.name}: current {format_pct(results.current_average)}, "
              f"projected {format_pct(results.projected_final)}")


if __name__ == '__main__':
    main()
