"""
POS HTTP API - Public API
=========================
"""

from core.http_api.contracts import (
    HttpApiErrorBody,
    HttpApiResponse,
    HttpApiResult,
    InsightsRequest,
    MutationRequest,
    ReportRequest,
    SignInRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    ErrorCode,
    error_response,
    exception_result,
    success_response,
)
from core.http_api.handlers import (
    get_app_data,
    get_report,
    get_session,
    post_app_data,
    post_chat,
    post_sales_insights,
    post_sign_in,
    post_sign_out,
    post_verify_license,
)

__all__ = [
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiResult",
    "InsightsRequest",
    "MutationRequest",
    "ReportRequest",
    "SignInRequest",
    "HttpApiDependencies",
    "ErrorCode",
    "error_response",
    "exception_result",
    "success_response",
    "get_app_data",
    "get_report",
    "get_session",
    "post_app_data",
    "post_chat",
    "post_sales_insights",
    "post_sign_in",
    "post_sign_out",
    "post_verify_license",
]
