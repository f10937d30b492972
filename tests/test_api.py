import json

import pytest

from conftest import SAMPLE_CSV


def test_health_ok(client, auth):
    """Test that the health check endpoint returns OK."""
    response = client.get("/api/v1/health", headers=auth)
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_missing_or_wrong_token_rejected(client):
    """Requests without the static bearer token are refused."""
    assert client.get("/api/v1/load-data").status_code == 401
    response = client.get("/api/v1/load-data", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}


def test_token_check_disabled_when_unset():
    from main import create_app
    app = create_app({"ARTDB_DB_URL": "sqlite://", "ARTDB_API_TOKEN": ""})
    assert app.test_client().get("/api/v1/health").status_code == 200


def test_load_empty_tables(client, auth):
    assert client.get("/api/v1/load-data", headers=auth).get_json() == {"data": []}
    assert client.get("/api/v1/load-recipes", headers=auth).get_json() == {"recipes": []}
    assert client.get("/api/v1/load-colors", headers=auth).get_json() == {"colors": []}


def test_save_then_load_data(client, auth):
    rows = [{"_id": 0, "Internal ID": "1", "Color": "Red"}]
    response = client.post("/api/v1/save-data", json={"data": rows}, headers=auth)
    assert response.get_json() == {"success": True, "message": "Saved 1 rows successfully"}
    assert client.get("/api/v1/load-data", headers=auth).get_json() == {"data": rows}


def test_save_overwrites_whole_blob(client, auth, recipes):
    client.post("/api/v1/save-recipes", json={"recipes": recipes}, headers=auth)
    client.post("/api/v1/save-recipes", json={"recipes": recipes[:1]}, headers=auth)
    loaded = client.get("/api/v1/load-recipes", headers=auth).get_json()["recipes"]
    assert loaded == recipes[:1]


@pytest.mark.parametrize("body", [{}, {"data": "rows"}, {"data": {"a": 1}}, None])
def test_save_rejects_non_list(client, auth, body):
    response = client.post("/api/v1/save-data", json=body, headers=auth)
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid data format"}


def test_import_flags_new_rows_against_previous_import(client, auth):
    """Only IDs absent from the previous import are flagged new."""
    first = client.post("/api/v1/import", data=SAMPLE_CSV,
                        content_type="text/csv", headers=auth).get_json()
    assert first["total_rows"] == 4 and first["new_rows"] == 4
    assert first["columns"][:2] == ["Internal ID", "Blank Silo"]

    again = SAMPLE_CSV + "5,Fleece,White,,,,\n"
    second = client.post("/api/v1/import", data=again,
                         content_type="text/csv", headers=auth).get_json()
    assert second["total_rows"] == 5 and second["new_rows"] == 1

    rows = client.get("/api/v1/load-data", headers=auth).get_json()["data"]
    assert [r["Internal ID"] for r in rows if r.get("_isNew")] == ["5"]


def test_import_multipart(client, auth):
    from io import BytesIO
    response = client.post(
        "/api/v1/import",
        data={"csv_file": (BytesIO(SAMPLE_CSV.encode()), "catalog.csv")},
        content_type="multipart/form-data", headers=auth,
    )
    assert response.get_json()["total_rows"] == 4


def test_import_empty_body(client, auth):
    response = client.post("/api/v1/import", data="", content_type="text/csv", headers=auth)
    assert response.status_code == 400


def test_import_header_only_keeps_data(client, auth):
    client.post("/api/v1/import", data=SAMPLE_CSV, content_type="text/csv", headers=auth)
    report = client.post("/api/v1/import", data="Internal ID\n",
                         content_type="text/csv", headers=auth).get_json()
    assert report["total_rows"] == 0 and report["errors"]
    assert len(client.get("/api/v1/load-data", headers=auth).get_json()["data"]) == 4


def _seed(client, auth):
    client.post("/api/v1/import", data=SAMPLE_CSV, content_type="text/csv", headers=auth)


def test_query_filters_and_sorts(client, auth):
    _seed(client, auth)
    filters = json.dumps({"Blank Silo": "Cotton"})
    body = client.get("/api/v1/query", headers=auth, query_string={
        "filters": filters, "sort": "Color", "order": "desc",
    }).get_json()
    assert body["total"] == 4 and body["matched"] == 2
    assert [r["Internal ID"] for r in body["rows"]] == ["1", "3"]
    assert body["sort"] == {"key": "Color", "direction": "desc"}
    assert body["active_filters"] == 1


def test_query_blank_sentinel(client, auth):
    _seed(client, auth)
    filters = json.dumps({"Blank Silo": "(Blank)"})
    body = client.get("/api/v1/query", headers=auth,
                      query_string={"filters": filters}).get_json()
    assert [r["Internal ID"] for r in body["rows"]] == ["4"]


def test_query_bad_filters_ignored(client, auth):
    _seed(client, auth)
    body = client.get("/api/v1/query?filters=not-json&order=sideways", headers=auth).get_json()
    assert body["matched"] == 4


def test_column_values(client, auth):
    _seed(client, auth)
    body = client.get("/api/v1/columns/Blank%20Silo/values", headers=auth).get_json()
    assert body["values"] == ["(Blank)", "Cotton", "Wool"]
    assert body["enumerated"] is True


def test_export_filtered_and_all(client, auth):
    """Export honours the query unless scope=all."""
    _seed(client, auth)
    response = client.get("/api/v1/export?q=wool", headers=auth)
    assert response.mimetype == "text/csv"
    assert "attachment; filename=export-" in response.headers["Content-Disposition"]
    lines = response.get_data(as_text=True).split("\n")
    assert lines[0].startswith("Internal ID,Blank Silo,Color")
    assert len(lines) == 2 and lines[1].startswith("2,Wool,Blue")

    everything = client.get("/api/v1/export?scope=all&q=wool", headers=auth)
    text = everything.get_data(as_text=True)
    assert len(text.split("\n")) == 5
    assert '"Navy, Dark"' in text


def test_recipe_resolve(client, auth, recipes):
    client.post("/api/v1/save-recipes", json={"recipes": recipes}, headers=auth)
    body = client.get("/api/v1/recipes/resolve?blank_silo=Cotton&slot=b", headers=auth).get_json()
    assert body["value"] == "Blue"
    assert body["options"][0] == {"slot": "A", "value": "Red"}
    miss = client.get("/api/v1/recipes/resolve?blank_silo=Wool&slot=B", headers=auth).get_json()
    assert miss["value"] == ""


def test_recipe_csv_import_appends_and_exports(client, auth, recipes):
    client.post("/api/v1/save-recipes", json={"recipes": recipes}, headers=auth)
    body = client.post("/api/v1/recipes/import",
                       data="Blank Silo,Material Type,A,B,C,D,E\nSilk,Woven,Ivory\n",
                       content_type="text/csv", headers=auth).get_json()
    assert body == {"imported": 1, "total": 4}
    text = client.get("/api/v1/recipes/export", headers=auth).get_data(as_text=True)
    assert text.splitlines()[-1] == "Silk,Woven,Ivory,,,,"


def test_color_csv_import_replaces(client, auth):
    client.post("/api/v1/save-colors", json={"colors": [{"id": "c", "name": "Old", "hex": "#fff"}]},
                headers=auth)
    client.post("/api/v1/colors/import", data="Color Name,Hex Value\nNavy,#000080\n",
                content_type="text/csv", headers=auth)
    colors = client.get("/api/v1/load-colors", headers=auth).get_json()["colors"]
    assert [(c["name"], c["hex"]) for c in colors] == [("Navy", "#000080")]


def test_reports(client, auth):
    _seed(client, auth)
    newly = client.get("/api/v1/reports/newly-added", headers=auth).get_json()
    assert newly["total_new"] == 4 and newly["ready"] == 1
    missing = client.get("/api/v1/reports/missing-data", headers=auth).get_json()
    assert missing["overall"]["with_value"] == 6


def test_cors_headers(client, auth):
    response = client.get("/api/v1/health", headers=auth)
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_non_ascii_token_rejected(client):
    response = client.get("/api/v1/load-data", headers={"Authorization": "Bearer tést"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}


def test_wrong_method_returns_json(client, auth):
    response = client.get("/api/v1/save-data", headers=auth)
    assert response.status_code == 405
    assert response.get_json() == {"error": "method not allowed"}
