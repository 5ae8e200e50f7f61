"""Job board component: search, submissions, applications and moderation."""

from abtech.components.jobs.component import (
    REQUIRED_FIELDS,
    job_errors,
    matches_query,
    parse_id,
    run,
    run_apply,
    run_create_job,
    run_delete_application,
    run_delete_job,
    run_delete_submission,
    run_list_applications,
    run_list_jobs,
    run_list_submissions,
    run_review_submission,
    run_search,
    run_submit,
    run_update_application,
    run_update_job,
)
from abtech.components.jobs.models import (
    ApplicationOutput,
    ApplyInput,
    ApplyOutput,
    CreateJobInput,
    DeleteInput,
    DeleteOutput,
    JobOutput,
    ListApplicationsInput,
    ReviewSubmissionInput,
    ReviewSubmissionOutput,
    SearchJobsInput,
    SearchJobsOutput,
    SubmitJobInput,
    SubmitJobOutput,
    UpdateApplicationInput,
    UpdateJobInput,
    ValidationError,
)
from abtech.components.jobs.ports import JobRepoPort

__all__ = [
    # Component
    "run",
    "run_search",
    "run_submit",
    "run_apply",
    "run_list_jobs",
    "run_create_job",
    "run_update_job",
    "run_delete_job",
    "run_list_submissions",
    "run_review_submission",
    "run_delete_submission",
    "run_list_applications",
    "run_update_application",
    "run_delete_application",
    # Pure functions
    "matches_query",
    "job_errors",
    "parse_id",
    "REQUIRED_FIELDS",
    # Models
    "ApplicationOutput",
    "ApplyInput",
    "ApplyOutput",
    "CreateJobInput",
    "DeleteInput",
    "DeleteOutput",
    "JobOutput",
    "ListApplicationsInput",
    "ReviewSubmissionInput",
    "ReviewSubmissionOutput",
    "SearchJobsInput",
    "SearchJobsOutput",
    "SubmitJobInput",
    "SubmitJobOutput",
    "UpdateApplicationInput",
    "UpdateJobInput",
    "ValidationError",
    # Ports
    "JobRepoPort",
]
