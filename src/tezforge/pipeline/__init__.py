"""
Submission pipeline: head, forge, sign, preapply, validate, inject.
"""

from tezforge.pipeline.submitter import (
    OperationSubmitter,
    SubmissionStage,
    check_applied_operation_results,
)

__all__ = ["OperationSubmitter", "SubmissionStage", "check_applied_operation_results"]
