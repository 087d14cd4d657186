import logging

from medportal.services.directory_service import DirectoryService, clean_ids

from conftest import MANAGER_PASSWORD, REP_EMAIL


def test_list_doctors_filtered_by_clinic(client, portal, rep_headers):
    response = client.get("/doctors", params={"clinic_id": portal.clinic.id}, headers=rep_headers)
    assert response.status_code == 200
    body = response.json()

    assert [d["last_name"] for d in body] == ["Adams", "Brown"]
    assert body[0]["clinics"] == [{"id": portal.clinic.id, "name": "Central Clinic"}]
    assert body[0]["specialization"]["display_name"] == "Cardiology"


def test_list_doctors_for_another_clinic_is_empty(client, admin_headers):
    created = client.post(
        "/clinics", json={"name": "Empty Clinic", "address": "2 Side St"}, headers=admin_headers
    ).json()
    response = client.get("/doctors", params={"clinic_id": created["id"]}, headers=admin_headers)
    assert response.json() == []


def test_unknown_doctor_is_404(client, admin_headers):
    response = client.get("/doctors/does-not-exist", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"detail": "Doctor does-not-exist not found.", "code": "not_found"}


def test_doctor_crud(client, portal, admin_headers):
    created = client.post(
        "/doctors",
        json={"first_name": "Carl", "last_name": "Cole", "clinic_ids": [portal.clinic.id]},
        headers=admin_headers,
    )
    assert created.status_code == 201
    doctor_id = created.json()["id"]

    updated = client.patch(
        f"/doctors/{doctor_id}", json={"phone": "555-0100", "clinic_ids": []}, headers=admin_headers
    )
    assert updated.status_code == 200
    assert updated.json()["phone"] == "555-0100"
    assert updated.json()["clinics"] == []
    assert updated.json()["first_name"] == "Carl"

    assert client.delete(f"/doctors/{doctor_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/doctors/{doctor_id}", headers=admin_headers).status_code == 404


def test_doctor_with_unknown_specialization_is_rejected(client, admin_headers):
    response = client.post(
        "/doctors",
        json={"first_name": "Dana", "last_name": "Dee", "specialization_id": "nope"},
        headers=admin_headers,
    )
    assert response.status_code == 404


def test_manager_cannot_create_doctors(client, manager_headers):
    response = client.post(
        "/doctors", json={"first_name": "Eve", "last_name": "East"}, headers=manager_headers
    )
    assert response.status_code == 403
    assert response.json()["code"] == "permission_denied"


def test_products_filtered_by_brand(client, portal, rep_headers):
    response = client.get("/products", params={"brand_id": portal.brand.id}, headers=rep_headers)
    assert [p["name"] for p in response.json()] == ["Cardiox 10mg", "Cardiox 20mg"]
    assert response.json()[0]["brand"]["name"] == "Cardiox"


def test_products_for_representative_follow_assigned_brands(client, portal, admin_headers):
    other_brand = client.post("/brands", json={"name": "Neurox"}, headers=admin_headers).json()
    client.post(
        "/products", json={"brand_id": other_brand["id"], "name": "Neurox 5mg"}, headers=admin_headers
    )

    response = client.get(
        "/products", params={"representative_id": portal.rep.id}, headers=admin_headers
    )
    assert [p["name"] for p in response.json()] == ["Cardiox 10mg", "Cardiox 20mg"]


def test_brand_with_products_cannot_be_deleted(client, portal, admin_headers):
    response = client.delete(f"/brands/{portal.brand.id}", headers=admin_headers)
    assert response.status_code == 409
    assert client.get(f"/brands/{portal.brand.id}", headers=admin_headers).status_code == 200


def test_duplicate_brand_name_is_a_conflict(client, portal, admin_headers):
    response = client.post("/brands", json={"name": "Cardiox"}, headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["code"] == "conflict"


def test_product_for_unknown_brand_is_404(client, admin_headers):
    response = client.post(
        "/products", json={"brand_id": "missing", "name": "Ghost"}, headers=admin_headers
    )
    assert response.status_code == 404


def test_clinic_update_is_partial(client, portal, admin_headers):
    response = client.patch(
        f"/clinics/{portal.clinic.id}", json={"phone": "555-0199"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Central Clinic"
    assert response.json()["phone"] == "555-0199"


def test_specializations(client, portal, admin_headers, rep_headers):
    created = client.post(
        "/specializations",
        json={"name": "neurology", "display_name": "Neurology"},
        headers=admin_headers,
    )
    assert created.status_code == 201

    names = [s["display_name"] for s in client.get("/specializations", headers=rep_headers).json()]
    assert names == ["Cardiology", "Neurology"]

    forbidden = client.post(
        "/specializations", json={"name": "x", "display_name": "X"}, headers=rep_headers
    )
    assert forbidden.status_code == 403


def test_manager_lists_only_own_representatives(client, portal, admin_headers, manager_headers):
    # A representative under a second manager
    other_manager = client.post(
        "/managers",
        json={"email": "second@example.com", "password": "second-pass", "full_name": "Sam Second"},
        headers=admin_headers,
    ).json()
    client.post(
        "/representatives",
        json={"first_name": "Tom", "last_name": "Third", "manager_id": other_manager["id"]},
        headers=admin_headers,
    )

    mine = client.get("/representatives", headers=manager_headers).json()
    everyone = client.get("/representatives", headers=admin_headers).json()

    assert {r["full_name"] for r in mine} == {"Rita Rep", "Oscar Other"}
    assert len(everyone) == 3


def test_manager_creates_representative_for_own_team(client, portal, manager_headers):
    response = client.post(
        "/representatives",
        json={
            "first_name": "Nina",
            "last_name": "New",
            "email": "nina@example.com",
            "password": "nina-pass",
            "brand_ids": [portal.brand.id],
        },
        headers=manager_headers,
    )
    assert response.status_code == 201
    body = response.json()

    assert body["manager_id"] == portal.manager.id
    assert body["full_name"] == "Nina New"
    assert body["user"]["email"] == "nina@example.com"
    assert body["user"]["role"] == "rep"
    assert [b["name"] for b in body["brands"]] == ["Cardiox"]


def test_manager_cannot_staff_another_team(client, portal, admin_headers, manager_headers):
    other_manager = client.post(
        "/managers",
        json={"email": "second@example.com", "password": "second-pass", "full_name": "Sam Second"},
        headers=admin_headers,
    ).json()

    response = client.post(
        "/representatives",
        json={"first_name": "Ivy", "last_name": "Intruder", "manager_id": other_manager["id"]},
        headers=manager_headers,
    )
    assert response.status_code == 403


def test_representative_rename_updates_full_name(client, portal, admin_headers):
    response = client.patch(
        f"/representatives/{portal.other_rep.id}",
        json={"last_name": "Olsen"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["full_name"] == "Oscar Olsen"


def test_rep_cannot_list_representatives(client, rep_headers):
    assert client.get("/representatives", headers=rep_headers).status_code == 403


def test_representative_search(client, portal, admin_headers):
    response = client.get("/representatives", params={"q": "rit"}, headers=admin_headers)
    assert [r["id"] for r in response.json()] == [portal.rep.id]


def test_representative_without_account_has_no_user(db_session, portal, caplog):
    with caplog.at_level(logging.WARNING, logger="medportal"):
        record = DirectoryService(db_session).get_representative(portal.other_rep.id)

    assert record.user is None
    # No linked account at all is not a lookup failure
    assert "No user record found" not in caplog.text


def test_manager_lifecycle(client, admin_headers, manager_headers, login):
    created = client.post(
        "/managers",
        json={"email": "temp@example.com", "password": "temp-pass", "full_name": "Tess Temp"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    manager_id = created.json()["id"]
    assert created.json()["user"]["role"] == "manager"

    assert client.get("/managers", headers=manager_headers).status_code == 403

    temp_headers = login("temp@example.com", "temp-pass")
    assert client.get("/auth/session", headers=temp_headers).json()["manager_id"] == manager_id

    assert client.delete(f"/managers/{manager_id}", headers=admin_headers).status_code == 204
    # Deleting the manager removes their account and its sessions
    assert client.get("/auth/session", headers=temp_headers).status_code == 401
    response = client.post("/auth/sign-in", json={"email": "temp@example.com", "password": "temp-pass"})
    assert response.json()["ok"] is False


def test_clean_ids_trims_before_deduplicating():
    assert clean_ids([" a", "a ", "", "  ", None, "b"]) == ("a", "b")


def test_padded_ids_resolve(client, portal, admin_headers):
    response = client.post(
        "/doctors",
        json={"first_name": "Pat", "last_name": "Padded", "clinic_ids": [f" {portal.clinic.id} "]},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert [c["id"] for c in response.json()["clinics"]] == [portal.clinic.id]


def test_manager_search_stays_within_team(client, foreign_rep, admin_headers, manager_headers):
    searched = client.get("/representatives", params={"q": "Xavier"}, headers=manager_headers)
    assert searched.status_code == 200
    assert searched.json() == []

    # Asking for the other team explicitly does not widen the scope either
    listed = client.get(
        "/representatives", params={"manager_id": foreign_rep.manager_id}, headers=manager_headers
    ).json()
    assert foreign_rep.id not in {r["id"] for r in listed}

    everyone = client.get("/representatives", params={"q": "Xavier"}, headers=admin_headers).json()
    assert [r["id"] for r in everyone] == [foreign_rep.id]


def test_manager_cannot_touch_another_team(client, foreign_rep, admin_headers, manager_headers):
    url = f"/representatives/{foreign_rep.id}"

    assert client.get(url, headers=manager_headers).status_code == 404
    renamed = client.patch(url, json={"first_name": "Hijacked"}, headers=manager_headers)
    assert renamed.status_code == 404
    assert client.delete(url, headers=manager_headers).status_code == 404

    unchanged = client.get(url, headers=admin_headers)
    assert unchanged.status_code == 200
    assert unchanged.json()["full_name"] == "Xavier Foreign"


def test_manager_cannot_hand_a_rep_to_another_team(
    client, portal, foreign_rep, manager_headers
):
    response = client.patch(
        f"/representatives/{portal.rep.id}",
        json={"manager_id": foreign_rep.manager_id},
        headers=manager_headers,
    )
    assert response.status_code == 403

    own = client.get(f"/representatives/{portal.rep.id}", headers=manager_headers).json()
    assert own["manager_id"] == portal.manager.id


def test_manager_edits_own_team(client, portal, manager_headers):
    response = client.patch(
        f"/representatives/{portal.other_rep.id}",
        json={"first_name": "Otto"},
        headers=manager_headers,
    )
    assert response.status_code == 200
    assert response.json()["full_name"] == "Otto Other"

    deleted = client.delete(f"/representatives/{portal.other_rep.id}", headers=manager_headers)
    assert deleted.status_code == 204


def test_specialization_lifecycle(client, portal, admin_headers, rep_headers):
    url = f"/specializations/{portal.specialization.id}"

    assert client.get(url, headers=rep_headers).json()["display_name"] == "Cardiology"
    assert client.patch(url, json={"display_name": "X"}, headers=rep_headers).status_code == 403
    assert client.delete(url, headers=rep_headers).status_code == 403

    updated = client.patch(url, json={"display_name": "Cardiology & Vascular"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["name"] == "cardiology"
    assert updated.json()["display_name"] == "Cardiology & Vascular"

    assert client.delete(url, headers=admin_headers).status_code == 204
    assert client.get(url, headers=admin_headers).status_code == 404

    # Doctors stay, without a specialization
    doctor = client.get(f"/doctors/{portal.doctors[0].id}", headers=admin_headers).json()
    assert doctor["specialization"] is None


def test_unknown_specialization_is_404(client, admin_headers):
    response = client.patch("/specializations/nope", json={"name": "x"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Specialization nope not found."


def test_manager_update(client, portal, admin_headers, manager_headers, login):
    url = f"/managers/{portal.manager.id}"

    assert client.patch(url, json={"full_name": "Me"}, headers=manager_headers).status_code == 403

    response = client.patch(
        url, json={"full_name": " Mona Moved ", "email": "Mona@Example.com"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["full_name"] == "Mona Moved"
    assert response.json()["user"]["email"] == "mona@example.com"

    # The login moves with the email
    headers = login("mona@example.com", MANAGER_PASSWORD)
    assert client.get("/auth/session", headers=headers).json()["manager_id"] == portal.manager.id


def test_manager_email_taken_is_a_conflict(client, portal, admin_headers):
    response = client.patch(
        f"/managers/{portal.manager.id}", json={"email": REP_EMAIL}, headers=admin_headers
    )
    assert response.status_code == 409

    unchanged = client.get(f"/managers/{portal.manager.id}", headers=admin_headers).json()
    assert unchanged["user"]["email"] == "manager@example.com"
