"""Course catalog component."""

from abtech.components.courses.component import (
    LEVELS,
    STATUSES,
    course_field_errors,
    run,
    run_admin_list,
    run_create_course,
    run_create_module,
    run_delete_course,
    run_delete_module,
    run_get,
    run_list,
    run_record_view,
    run_reorder_modules,
    run_update_course,
    run_update_module,
    summarize,
)
from abtech.components.courses.models import (
    AdminListCoursesInput,
    AdminListCoursesOutput,
    CourseOutput,
    CourseSummary,
    CreateCourseInput,
    CreateModuleInput,
    DeleteCourseInput,
    DeleteModuleInput,
    GetCourseInput,
    GetCourseOutput,
    ListCoursesInput,
    ListCoursesOutput,
    ModuleOutput,
    RecordViewInput,
    RecordViewOutput,
    ReorderModulesInput,
    UpdateCourseInput,
    UpdateModuleInput,
)
from abtech.components.courses.ports import CourseAdminRepoPort, CourseRepoPort

__all__ = [
    "run",
    "run_list",
    "run_get",
    "run_record_view",
    "run_admin_list",
    "run_create_course",
    "run_update_course",
    "run_delete_course",
    "run_create_module",
    "run_update_module",
    "run_reorder_modules",
    "run_delete_module",
    "course_field_errors",
    "summarize",
    "LEVELS",
    "STATUSES",
    "CourseSummary",
    "ListCoursesInput",
    "ListCoursesOutput",
    "GetCourseInput",
    "GetCourseOutput",
    "RecordViewInput",
    "RecordViewOutput",
    "AdminListCoursesInput",
    "AdminListCoursesOutput",
    "CreateCourseInput",
    "UpdateCourseInput",
    "DeleteCourseInput",
    "CourseOutput",
    "CreateModuleInput",
    "UpdateModuleInput",
    "ReorderModulesInput",
    "DeleteModuleInput",
    "ModuleOutput",
    "CourseRepoPort",
    "CourseAdminRepoPort",
]
