"""
Tests for the sign-up, sign-in and identity endpoints.
"""
from clinic_sso.auth.models import Owner, Vet

OWNER = {
    "full_name": "Jane Doe",
    "email": "a@x.com",
    "phone": "+100200300",
    "password": "Password123!"
}

VET = {
    "full_name": "Dr. John Smith",
    "email": "vet@x.com",
    "password": "Password123!"
}


def identity_of(client, token):
    return client.get("/auth/v1/identity", headers={"Authorization": f"Bearer {token}"})


def test_sign_up_owner(client, db):
    response = client.post("/auth/v1/sign-up/owner", json=OWNER)
    assert response.status_code == 200
    assert response.json()["token"]
    assert db.query(Owner).count() == 1


def test_sign_up_owner_twice_is_conflict(client, db):
    client.post("/auth/v1/sign-up/owner", json=OWNER)
    response = client.post("/auth/v1/sign-up/owner", json={**OWNER, "email": "other@x.com"})

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]
    assert db.query(Owner).count() == 1


def test_sign_up_owner_with_phone_only(client):
    response = client.post("/auth/v1/sign-up/owner", json={
        "full_name": "Phone Only",
        "phone": "+155500000",
        "password": "pw"
    })
    assert response.status_code == 200


def test_sign_up_owner_requires_identity(client):
    response = client.post("/auth/v1/sign-up/owner", json={"full_name": "Nobody", "password": "pw"})
    assert response.status_code == 422
    assert response.json()["detail"] == "Validation error"


def test_sign_up_owner_rejects_bad_email(client):
    response = client.post("/auth/v1/sign-up/owner", json={**OWNER, "email": "not-an-email"})
    assert response.status_code == 422


def test_sign_up_vet(client, db):
    response = client.post("/auth/v1/sign-up/vet", json=VET)
    assert response.status_code == 200
    assert db.query(Vet).count() == 1

    conflict = client.post("/auth/v1/sign-up/vet", json=VET)
    assert conflict.status_code == 409


def test_sign_up_vet_requires_email(client):
    response = client.post("/auth/v1/sign-up/vet", json={"full_name": "Dr. X", "password": "pw"})
    assert response.status_code == 422


def test_sign_in_returns_token_for_same_account(client):
    sign_up = client.post("/auth/v1/sign-up/owner", json=OWNER)
    sign_in = client.post("/auth/v1/sign-in", json={"email": "a@x.com", "password": "Password123!"})
    assert sign_in.status_code == 200

    first = identity_of(client, sign_up.json()["token"])
    second = identity_of(client, sign_in.json()["token"])
    assert first.status_code == 200
    assert first.json()["user_id"] == second.json()["user_id"]


def test_sign_in_by_phone(client):
    client.post("/auth/v1/sign-up/owner", json=OWNER)
    response = client.post("/auth/v1/sign-in", json={"phone": "+100200300", "password": "Password123!"})
    assert response.status_code == 200


def test_sign_in_as_vet(client):
    client.post("/auth/v1/sign-up/vet", json=VET)

    as_owner = client.post("/auth/v1/sign-in", json={"email": VET["email"], "password": VET["password"]})
    as_vet = client.post("/auth/v1/sign-in", json={
        "email": VET["email"],
        "password": VET["password"],
        "is_vet": True
    })

    assert as_owner.status_code == 401
    assert as_vet.status_code == 200


def test_sign_in_failures_are_indistinguishable(client):
    client.post("/auth/v1/sign-up/owner", json=OWNER)

    wrong_password = client.post("/auth/v1/sign-in", json={"email": "a@x.com", "password": "nope"})
    unknown = client.post("/auth/v1/sign-in", json={"email": "ghost@x.com", "password": "Password123!"})

    assert wrong_password.status_code == unknown.status_code == 401
    assert wrong_password.json() == unknown.json()
    assert wrong_password.headers["WWW-Authenticate"] == "Bearer"


def test_identity_requires_token(client):
    response = client.get("/auth/v1/identity")
    assert response.status_code == 401


def test_identity_rejects_garbage_token(client):
    response = identity_of(client, "garbage")
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"
