def test_health_reports_database_readiness(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["readiness"]["database"]["ok"] is True


def test_metrics_exposes_request_counters(client):
    client.get("/")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "catalog_http_requests_total" in response.text


def test_root_hides_docs_outside_debug(client):
    assert client.get("/").json()["docs"] == "disabled"


def test_metrics_label_requests_by_route_template(client):
    client.get("/api/v1/products/12345")
    text = client.get("/metrics").text
    assert 'path="/api/v1/products/{product_id}"' in text
    assert 'path="/api/v1/products/12345"' not in text


def test_openapi_documents_error_envelope(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    responses = schema["paths"]["/api/v1/auth/refresh"]["post"]["responses"]
    assert responses["403"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
