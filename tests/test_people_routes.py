import uuid

PEOPLE = "/api/v1/people"


def test_people_routes_require_a_session(client):
    res = client.get(PEOPLE)
    assert res.status_code in (401, 403)


def test_invalid_token_is_rejected(client):
    res = client.get(PEOPLE, headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401


def test_create_person_applies_form_defaults(client, auth_headers, fake_supabase):
    res = client.post(
        PEOPLE,
        json={"first_name": "  Asha ", "last_name": "Rao", "phone_number": "9800000000", "city": "Mysuru"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    person = res.json()
    assert person["first_name"] == "Asha"
    assert person["country"] == "India"
    assert person["tq"] is None
    assert person["dist"] is None
    assert person["created_at"] is not None
    assert len(fake_supabase.rows("people")) == 1


def test_missing_required_field_never_writes(client, auth_headers, fake_supabase):
    res = client.post(PEOPLE, json={"first_name": "Asha", "last_name": "   ", "phone_number": "1"}, headers=auth_headers)
    assert res.status_code == 422
    assert ("people", "insert") not in fake_supabase.calls


def test_duplicate_name_is_rejected_before_write(client, auth_headers, make_person, fake_supabase):
    make_person("Asha", "Rao")
    res = client.post(PEOPLE, json={"first_name": "Asha", "last_name": "Rao", "phone_number": "2"}, headers=auth_headers)
    assert res.status_code == 409
    assert "already exists" in res.json()["detail"]
    assert len(fake_supabase.rows("people")) == 1


def test_same_name_with_different_case_is_allowed(client, auth_headers, make_person):
    make_person("Asha", "Rao")
    res = client.post(PEOPLE, json={"first_name": "asha", "last_name": "rao", "phone_number": "2"}, headers=auth_headers)
    assert res.status_code == 201


def test_resubmitting_own_name_on_edit_is_not_a_duplicate(client, auth_headers, make_person):
    person = make_person("Asha", "Rao")
    res = client.put(
        f"{PEOPLE}/{person['id']}",
        json={"first_name": "Asha", "last_name": "Rao", "city": "Hubballi"},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["city"] == "Hubballi"


def test_edit_into_another_persons_name_is_rejected(client, auth_headers, make_person):
    make_person("Asha", "Rao")
    other = make_person("Ravi", "Kumar")
    res = client.put(f"{PEOPLE}/{other['id']}", json={"first_name": "Asha", "last_name": "Rao"}, headers=auth_headers)
    assert res.status_code == 409
    assert client.get(f"{PEOPLE}/{other['id']}", headers=auth_headers).json()["first_name"] == "Ravi"


def test_partial_edit_checks_the_effective_name(client, auth_headers, make_person):
    make_person("Asha", "Rao")
    other = make_person("Asha", "Kumar")
    res = client.put(f"{PEOPLE}/{other['id']}", json={"last_name": "Rao"}, headers=auth_headers)
    assert res.status_code == 409


def test_edit_keeps_created_at(client, auth_headers, make_person):
    person = make_person("Asha", "Rao")
    res = client.put(f"{PEOPLE}/{person['id']}", json={"phone_number": "9811111111"}, headers=auth_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["created_at"] == person["created_at"]
    assert body["first_name"] == "Asha"
    assert body["phone_number"] == "9811111111"


def test_failed_duplicate_check_is_not_treated_as_no_duplicate(client, auth_headers, fake_supabase):
    fake_supabase.fail_when(lambda table, op, query: table == "people" and op == "select" and "first_name" in query.eqs)
    res = client.post(PEOPLE, json={"first_name": "Asha", "last_name": "Rao", "phone_number": "1"}, headers=auth_headers)
    assert res.status_code == 503
    assert res.json()["detail"] == "Failed to check for existing person"
    assert fake_supabase.rows("people") == []


def test_missing_person_is_not_found(client, auth_headers):
    assert client.get(f"{PEOPLE}/ghost", headers=auth_headers).status_code == 404
    assert client.put(f"{PEOPLE}/ghost", json={"city": "x"}, headers=auth_headers).status_code == 404
    assert client.delete(f"{PEOPLE}/ghost", headers=auth_headers).status_code == 404


def test_delete_person(client, auth_headers, make_person):
    person = make_person("Asha", "Rao")
    assert client.delete(f"{PEOPLE}/{person['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"{PEOPLE}/{person['id']}", headers=auth_headers).status_code == 404


def test_bulk_delete_continues_past_a_failure(client, auth_headers, make_person, fake_supabase):
    x = make_person("Asha", "Rao")
    y = make_person("Ravi", "Kumar")
    z = make_person("Meena", "Shetty")
    fake_supabase.fail_when(lambda table, op, query: op == "delete" and query.eqs.get("id") == y["id"])

    res = client.post(f"{PEOPLE}/bulk-delete", json={"ids": [x["id"], y["id"], z["id"]]}, headers=auth_headers)

    assert res.status_code == 200
    body = res.json()
    statuses = {r["id"]: r["status"] for r in body["results"]}
    assert statuses == {x["id"]: "deleted", y["id"]: "failed", z["id"]: "deleted"}
    assert [p["id"] for p in body["people"]] == [y["id"]]


def test_bulk_delete_reports_already_deleted_ids(client, auth_headers, make_person):
    x = make_person("Asha", "Rao")
    res = client.post(f"{PEOPLE}/bulk-delete", json={"ids": [x["id"], "gone"]}, headers=auth_headers)
    statuses = {r["id"]: r["status"] for r in res.json()["results"]}
    assert statuses == {x["id"]: "deleted", "gone": "not_found"}
    assert res.json()["people"] == []


def test_bulk_delete_needs_ids(client, auth_headers):
    assert client.post(f"{PEOPLE}/bulk-delete", json={"ids": []}, headers=auth_headers).status_code == 422


def test_list_people(client, auth_headers, make_person):
    make_person("Asha", "Rao")
    make_person("Ravi", "Kumar", tq="Hunsur", dist="Mysuru")
    people = client.get(PEOPLE, headers=auth_headers).json()
    assert {p["first_name"] for p in people} == {"Asha", "Ravi"}
    ravi = next(p for p in people if p["first_name"] == "Ravi")
    assert ravi["tq"] == "Hunsur"
    assert ravi["dist"] == "Mysuru"


def test_unknown_well_formed_id_is_not_found(client, auth_headers):
    missing = str(uuid.uuid4())
    assert client.get(f"{PEOPLE}/{missing}", headers=auth_headers).status_code == 404
    assert client.put(f"{PEOPLE}/{missing}", json={"city": "x"}, headers=auth_headers).status_code == 404
    assert client.delete(f"{PEOPLE}/{missing}", headers=auth_headers).status_code == 404


def test_bulk_delete_keeps_outcomes_when_relisting_fails(client, auth_headers, make_person, fake_supabase):
    x = make_person("Asha", "Rao")
    fake_supabase.fail_when(lambda table, op, query: table == "people" and op == "select" and not query.eqs)

    res = client.post(f"{PEOPLE}/bulk-delete", json={"ids": [x["id"]]}, headers=auth_headers)

    assert res.status_code == 200
    assert res.json()["results"] == [{"id": x["id"], "status": "deleted", "detail": None}]
    assert res.json()["people"] is None
    assert fake_supabase.rows("people") == []
