from __future__ import annotations

from crm.main import create_app


def test_required_endpoint_paths_are_registered():
    schema = create_app().openapi()
    paths = {(method.upper(), path) for path, operations in schema["paths"].items() for method in operations}
    required = [
        ("GET", "/api/v1/health"),
        ("POST", "/api/v1/auth/login"),
        ("POST", "/api/v1/auth/refresh"),
        ("GET", "/api/v1/pipeline-stages"),
        ("POST", "/api/v1/pipeline-stages/{stage_id}/default"),
        ("PUT", "/api/v1/pipeline-stages/order"),
        ("DELETE", "/api/v1/pipeline-stages/{stage_id}"),
        ("GET", "/api/v1/customers"),
        ("GET", "/api/v1/customers/tabs"),
        ("GET", "/api/v1/customers/{customer_id}/move-stage"),
        ("POST", "/api/v1/customers/{customer_id}/move-stage"),
        ("POST", "/api/v1/customers/{customer_id}/assign-employee"),
        ("GET", "/api/v1/customers/{customer_id}/history"),
        ("POST", "/api/v1/customers/{customer_id}/restore"),
        ("GET", "/api/v1/board"),
        ("POST", "/api/v1/board/move"),
        ("DELETE", "/api/v1/lead-sources/{lead_source_id}"),
        ("GET", "/api/v1/tasks/calendar"),
        ("POST", "/api/v1/tasks/{task_id}/complete"),
        ("POST", "/api/v1/quotes"),
        ("POST", "/api/v1/customers/{customer_id}/documents"),
        ("GET", "/api/v1/employees"),
    ]
    for item in required:
        assert item in paths
