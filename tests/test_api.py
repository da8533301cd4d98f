import asyncio
import tempfile

from conftest import MEMBER_EMAIL, MEMBER_PASSWORD, login
from services.school_directory.schemas.users import UserRole

NEW_SCHOOL = {
    "name": "Sapporo Language Center",
    "address": "3-3 Chuo-ku, Sapporo",
    "city": "Sapporo",
    "phone": ["011-222-3333", "  "],
    "schedule": ["Evening"],
    "course_types": ["JLPT N4"],
    "custom_courses": [""],
    "images": ["https://example.com/sapporo.jpg"],
}


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["storage_mode"] == "local"


# --- schools ---

def test_list_schools_with_filters(client):
    response = client.get("/schools", params={"location": "Tokyo", "course_type": "JLPT N3"})

    body = response.json()
    assert response.status_code == 200
    assert body["count"] == 1
    assert body["schools"][0]["id"] == "2"


def test_unknown_course_type_is_rejected(client):
    assert client.get("/schools", params={"course_type": "JLPT N9"}).status_code == 422


def test_cities(client):
    assert client.get("/schools/cities").json() == ["Tokyo", "Kyoto", "Osaka", "Fukuoka"]


def test_school_detail(client):
    body = client.get("/schools/1").json()

    assert body["review_count"] == 2
    assert body["average_rating"] == 4.5
    assert body["all_courses"] == ["JLPT N5", "JLPT N4"]
    assert body["coordinates"] == [35.6938, 139.7034]
    assert "/embed" in body["map_embed_url"]
    assert body["is_saved"] is False


def test_missing_school_is_404(client):
    assert client.get("/schools/404").status_code == 404


def test_school_reviews_newest_first(client):
    reviews = client.get("/schools/1/reviews").json()

    assert [review["id"] for review in reviews] == ["2", "1"]
    assert reviews[0]["display_name"] == "Yuki Sato"


# --- reviews ---

def test_posting_review_requires_login(client):
    response = client.post("/schools/3/reviews", json={"rating": 5, "comment": "Great"})
    assert response.status_code == 401


def test_review_validation(client, member_headers):
    no_rating = client.post("/schools/3/reviews", json={"comment": "Great"}, headers=member_headers)
    no_comment = client.post("/schools/3/reviews", json={"rating": 4, "comment": "  "}, headers=member_headers)

    assert no_rating.status_code == 400
    assert no_rating.json()["detail"] == "Please select a rating."
    assert no_comment.status_code == 400


def test_post_and_delete_own_review(client, member_headers, directory):
    response = client.post("/schools/3/reviews", json={"rating": 4, "comment": "Lovely"}, headers=member_headers)

    assert response.status_code == 201
    review = response.json()
    assert review["user_id"] == "2"
    assert review["display_name"] == "Kenji T."
    assert directory.data.get_review(review["id"]) is not None

    response = client.delete(f"/reviews/{review['id']}", headers=member_headers)
    assert response.status_code == 200
    assert directory.data.get_review(review["id"]) is None


def test_cannot_delete_someone_elses_review(client, member_headers):
    # Review 2 belongs to Yuki
    assert client.delete("/reviews/2", headers=member_headers).status_code == 403


def test_admin_can_delete_any_review(client, admin_headers):
    assert client.delete("/reviews/2", headers=admin_headers).status_code == 200


# --- auth ---

def test_login_failure(client):
    response = client.post("/auth/login", json={"email": MEMBER_EMAIL, "password": "nope"})
    assert response.status_code == 401


def test_me_and_logout(client, member_headers):
    me = client.get("/auth/me", headers=member_headers).json()
    assert me["email"] == MEMBER_EMAIL
    assert "password" not in me

    assert client.post("/auth/logout", headers=member_headers).status_code == 200
    assert client.get("/auth/me", headers=member_headers).status_code == 401


def test_invalid_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_signup(client, directory):
    response = client.post("/auth/signup", json={
        "email": "hana@example.com",
        "password": "hanapassword",
        "confirm_password": "hanapassword",
        "username": "Hana",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["role"] == "user"
    assert directory.data.find_user_by_email("hana@example.com") is not None

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    assert client.get("/auth/me", headers=headers).json()["username"] == "Hana"


def test_signup_rejects_duplicate_and_mismatch(client, directory):
    users_before = directory.data.users
    duplicate = client.post("/auth/signup", json={
        "email": "YUKI.sato@example.com",
        "password": "password123",
        "confirm_password": "password123",
        "username": "Yuki",
    })
    mismatch = client.post("/auth/signup", json={
        "email": "new@example.com",
        "password": "password123",
        "confirm_password": "password124",
        "username": "New",
    })
    short = client.post("/auth/signup", json={
        "email": "new@example.com",
        "password": "short",
        "confirm_password": "short",
        "username": "New",
    })

    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "An account with this email already exists."
    assert mismatch.status_code == 400
    assert short.status_code == 422
    assert directory.data.users == users_before


def test_profile_update(client, member_headers, directory):
    response = client.patch("/auth/profile", json={"username": "Kenji Tanaka"}, headers=member_headers)

    assert response.status_code == 200
    assert response.json()["username"] == "Kenji Tanaka"
    assert directory.data.get_user("2").username == "Kenji Tanaka"


def test_profile_validation(client, member_headers):
    unchanged = client.patch("/auth/profile", json={"username": "Kenji T."}, headers=member_headers)
    mismatch = client.patch(
        "/auth/profile", json={"password": "longenough1", "confirm_password": "longenough2"}, headers=member_headers,
    )
    short = client.patch("/auth/profile", json={"password": "short", "confirm_password": "short"}, headers=member_headers)

    assert unchanged.json()["detail"] == "No changes to save."
    assert mismatch.status_code == 400
    assert short.status_code == 400


def test_profile_password_change_takes_effect(client, member_headers):
    client.patch(
        "/auth/profile", json={"password": "brandnewpass", "confirm_password": "brandnewpass"}, headers=member_headers,
    )

    assert client.post("/auth/login", json={"email": MEMBER_EMAIL, "password": MEMBER_PASSWORD}).status_code == 401
    login(client, MEMBER_EMAIL, "brandnewpass")


# --- saved schools ---

def test_saved_schools_survive_relogin(client, member_headers):
    assert client.post("/saved/4/toggle", headers=member_headers).json() == ["4"]
    assert client.post("/saved/1/toggle", headers=member_headers).json() == ["4", "1"]

    client.post("/auth/logout", headers=member_headers)
    headers = login(client, MEMBER_EMAIL, MEMBER_PASSWORD, headers=member_headers)

    saved = client.get("/saved", headers=headers).json()
    # Collection order
    assert [school["id"] for school in saved["schools"]] == ["1", "4"]
    assert client.get("/schools/4", headers=headers).json()["is_saved"] is True


def test_toggle_unknown_school(client, member_headers):
    assert client.post("/saved/404/toggle", headers=member_headers).status_code == 404


def test_admins_have_no_saved_page(client, admin_headers):
    assert client.get("/saved", headers=admin_headers).status_code == 403


# --- admin ---

def test_admin_routes_require_admin(client, member_headers):
    assert client.get("/admin/dashboard").status_code == 401
    assert client.get("/admin/dashboard", headers=member_headers).status_code == 403


def test_dashboard(client, admin_headers):
    body = client.get("/admin/dashboard", headers=admin_headers).json()

    assert body["storage_mode"] == "local"
    assert body["total_schools"] == 5
    assert body["schools_per_city"]["Tokyo"] == 2
    assert body["setup_required"] is False


def test_dashboard_excel_export(client, admin_headers):
    response = client.get("/admin/dashboard/export-excel", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert response.content[:2] == b"PK"


def test_dashboard_excel_export_removes_its_temp_file(client, admin_headers, tmp_path, monkeypatch):
    export_dir = tmp_path / "exports"
    export_dir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(export_dir))

    response = client.get("/admin/dashboard/export-excel", headers=admin_headers)

    assert response.status_code == 200
    assert list(export_dir.iterdir()) == []


def test_export_code(client, admin_headers):
    body = client.get("/admin/export", headers=admin_headers).json()

    assert body["filename"] == "seed_data.py"
    assert "SEED_SCHOOLS = [" in body["code"]


def test_seed_in_local_mode(client, admin_headers):
    body = client.post("/admin/seed", headers=admin_headers).json()
    assert body["ok"] is False


def test_school_crud(client, admin_headers, directory):
    created = client.post("/admin/schools", json=NEW_SCHOOL, headers=admin_headers)
    assert created.status_code == 201
    school = created.json()
    assert school["phone"] == ["011-222-3333"]
    assert school["custom_courses"] == []

    updated = client.put(
        f"/admin/schools/{school['id']}", json={**NEW_SCHOOL, "name": "Sapporo LC"}, headers=admin_headers,
    )
    assert updated.json()["name"] == "Sapporo LC"
    assert directory.data.get_school(school["id"]).name == "Sapporo LC"

    assert client.delete(f"/admin/schools/{school['id']}", headers=admin_headers).status_code == 200
    assert directory.data.get_school(school["id"]) is None


def test_school_form_requires_phone_and_image(client, admin_headers):
    no_phone = client.post("/admin/schools", json={**NEW_SCHOOL, "phone": [" "]}, headers=admin_headers)
    no_image = client.post("/admin/schools", json={**NEW_SCHOOL, "images": []}, headers=admin_headers)

    assert no_phone.status_code == 422
    assert no_image.status_code == 422


def test_user_table_flags(client, admin_headers):
    users = {user["id"]: user for user in client.get("/admin/users", headers=admin_headers).json()}

    assert users["1"]["can_change_role"] is False
    assert users["1"]["can_delete"] is False
    assert users["2"]["can_change_role"] is True
    assert "password" not in users["2"]


def test_last_admin_role_control_is_noop_but_store_is_not(client, admin_headers, directory):
    response = client.patch("/admin/users/1/role", json={"role": "user"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    assert directory.data.get_user("1").role == "admin"

    asyncio.run(directory.data.update_user_role("1", UserRole.USER))
    assert directory.data.get_user("1").role == UserRole.USER


def test_promote_and_delete_user(client, admin_headers, directory):
    promoted = client.patch("/admin/users/3/role", json={"role": "admin"}, headers=admin_headers).json()
    assert promoted["role"] == "admin"
    assert promoted["can_change_role"] is True

    blocked = client.delete("/admin/users/3", headers=admin_headers).json()
    assert blocked["deleted"] is False
    assert directory.data.get_user("3") is not None

    removed = client.delete("/admin/users/2", headers=admin_headers).json()
    assert removed["deleted"] is True
    assert directory.data.get_user("2") is None


def test_admin_review_table(client, admin_headers, directory):
    reviews = client.get("/admin/reviews", headers=admin_headers).json()

    labels = {review["id"]: review for review in reviews}
    assert labels["1"]["school_name"] == "Genki Japanese and Culture School"
    assert labels["1"]["reviewer"] == "kenji.tanaka"

    assert client.delete("/admin/reviews/1", headers=admin_headers).status_code == 200
    assert directory.data.get_review("1") is None


def test_review_for_deleted_school_gets_fallback_label(client, admin_headers):
    client.delete("/admin/schools/2", headers=admin_headers)

    reviews = {review["id"]: review for review in client.get("/admin/reviews", headers=admin_headers).json()}
    assert reviews["3"]["school_name"] == "Unknown School (ID: 2)"
