from referhub.core.security import decode_access_token


def test_signup_returns_token_and_user(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "New.User@Example.com", "password": "pw123456", "full_name": "New User"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "new.user@example.com"
    assert body["user"]["full_name"] == "New User"
    assert "password" not in body["user"]
    assert decode_access_token(body["access_token"])["sub"] == "new.user@example.com"


def test_signup_rejects_duplicate_email(client, register):
    register("dup@example.com")

    response = client.post(
        "/api/auth/signup",
        json={"email": "dup@example.com", "password": "x", "full_name": "Dup"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_signup_rejects_bad_email(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "not-an-email", "password": "x", "full_name": "Bad"},
    )

    assert response.status_code == 422


def test_login_with_valid_credentials(client, register):
    register("login@example.com", password="correct-horse")

    response = client.post(
        "/api/auth/login",
        json={"email": "login@example.com", "password": "correct-horse"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["access_token"]
    assert body["user"]["email"] == "login@example.com"


def test_login_with_wrong_password(client, register):
    register("login@example.com", password="correct-horse")

    response = client.post(
        "/api/auth/login",
        json={"email": "login@example.com", "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_user(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "ghost@example.com", "password": "whatever"},
    )

    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401


def test_me_with_token(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["email"] == "referrer@example.com"


def test_invalid_token_rejected(client):
    response = client.get("/api/candidates", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
