"""
Tests for profile management, seeker skills/portfolio and the public catalogues.
"""

from skillshub.db.database import get_db_session
from skillshub.db.seed import seed_locations
from helpers import upload


class TestSeekerProfile:

    def test_get_profile(self, seeker):
        response = seeker.get("/api/profile/seeker")

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["email"] == seeker.email
        assert body["profile"]["pathway"] == "GRADUATE"
        assert body["profile"]["skills"] == []
        assert body["profile"]["resumeFile"] is None

    def test_partial_update(self, seeker):
        seeker.patch("/api/profile/seeker", json={"profession": "Front-end Developer", "bio": "React fan"})

        response = seeker.patch("/api/profile/seeker", json={
            "headline": "Junior developer", "dateOfBirth": "1999-05-01", "yearsExperience": 1,
        })

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["profession"] == "Front-end Developer"
        assert profile["bio"] == "React fan"
        assert profile["headline"] == "Junior developer"
        assert profile["dateOfBirth"] == "1999-05-01"
        assert profile["yearsExperience"] == 1

    def test_resume_must_exist(self, seeker):
        response = seeker.patch("/api/profile/seeker", json={"resumeFileId": "nope"})

        assert response.status_code == 404

    def test_resume_is_summarised(self, seeker):
        resume_id = upload(seeker, file_type="resume", name="resume.pdf")
        seeker.patch("/api/profile/seeker", json={"resumeFileId": resume_id})

        profile = seeker.get("/api/profile/seeker").json()["profile"]

        assert profile["resumeFile"]["id"] == resume_id
        assert profile["resumeFile"]["bucketKey"].startswith("profiles/resumes/")

    def test_employer_forbidden(self, employer):
        assert employer.get("/api/profile/seeker").status_code == 403
        assert employer.patch("/api/profile/seeker", json={"bio": "x"}).status_code == 403


class TestEmployerProfile:

    def test_get_and_update(self, employer):
        profile = employer.get("/api/profile/employer").json()["profile"]
        assert profile["orgType"] == "Startup"

        response = employer.patch("/api/profile/employer", json={"website": "https://salonedigital.example"})

        assert response.status_code == 200
        updated = response.json()["profile"]
        assert updated["website"] == "https://salonedigital.example"
        assert updated["orgName"] == profile["orgName"]

    def test_blank_org_name(self, employer):
        response = employer.patch("/api/profile/employer", json={"orgName": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Organization name cannot be empty"}

    def test_seeker_forbidden(self, seeker):
        assert seeker.get("/api/profile/employer").status_code == 403


class TestAccountUpdate:

    def test_update_name_phone_gender(self, seeker):
        response = seeker.patch("/api/profile/update", json={
            "firstName": " Mariatu ", "phone": "+232 76 000000", "gender": "FEMALE",
        })

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["firstName"] == "Mariatu"
        assert user["lastName"] == "Kamara"
        assert user["phone"] == "+232 76 000000"
        assert user["gender"] == "FEMALE"

    def test_blank_name_rejected(self, seeker):
        response = seeker.patch("/api/profile/update", json={"firstName": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "First name cannot be empty"}
        assert seeker.get("/api/auth/me").json()["firstName"] == "Mariama"

    def test_clear_gender(self, seeker):
        seeker.patch("/api/profile/update", json={"gender": "FEMALE"})

        user = seeker.patch("/api/profile/update", json={"gender": None}).json()["user"]

        assert user["gender"] is None

    def test_invalid_gender(self, seeker):
        assert seeker.patch("/api/profile/update", json={"gender": "ROBOT"}).status_code == 400


class TestSeekerSkills:

    def test_add_list_and_remove(self, seeker, skills):
        seeker.post("/api/seeker/skills", json={"skillId": skills["welding"], "level": 4})
        seeker.post("/api/seeker/skills", json={"skillId": skills["carpentry"]})

        listed = seeker.get("/api/seeker/skills").json()["skills"]
        assert [(s["name"], s["level"]) for s in listed] == [("Carpentry", 1), ("Welding", 4)]

        assert seeker.delete(f"/api/seeker/skills/{skills['welding']}").status_code == 200
        assert [s["slug"] for s in seeker.get("/api/seeker/skills").json()["skills"]] == ["carpentry"]

    def test_re_adding_updates_level(self, seeker, skills):
        seeker.post("/api/seeker/skills", json={"skillId": skills["welding"], "level": 2})
        seeker.post("/api/seeker/skills", json={"skillId": skills["welding"], "level": 5})

        [skill] = seeker.get("/api/seeker/skills").json()["skills"]

        assert skill["level"] == 5

    def test_unknown_skill(self, seeker):
        response = seeker.post("/api/seeker/skills", json={"skillId": 999})

        assert response.status_code == 404

    def test_level_out_of_range(self, seeker, skills):
        response = seeker.post("/api/seeker/skills", json={"skillId": skills["welding"], "level": 9})

        assert response.status_code == 400

    def test_remove_missing(self, seeker, skills):
        assert seeker.delete(f"/api/seeker/skills/{skills['welding']}").status_code == 404


class TestPortfolio:

    def test_create_and_list(self, seeker):
        seeker.post("/api/seeker/portfolio", json={"title": "Landing page"})
        response = seeker.post("/api/seeker/portfolio", json={
            "title": "  Shop redesign ", "description": "E-commerce UI", "linkUrl": "https://shop.example",
        })

        assert response.status_code == 201
        item = response.json()["item"]
        assert item["title"] == "Shop redesign"
        assert item["linkUrl"] == "https://shop.example"
        assert item["file"] is None
        titles = [i["title"] for i in seeker.get("/api/seeker/portfolio").json()["portfolio"]]
        assert titles == ["Shop redesign", "Landing page"]

    def test_attach_file(self, seeker):
        file_id = upload(seeker, file_type="portfolio", name="shot.png", content=b"\x89PNG", content_type="image/png")

        item = seeker.post("/api/seeker/portfolio", json={"title": "Mockups", "fileId": file_id}).json()["item"]

        assert item["file"]["id"] == file_id
        assert item["file"]["contentType"] == "image/png"

    def test_unknown_file(self, seeker):
        response = seeker.post("/api/seeker/portfolio", json={"title": "Mockups", "fileId": "missing"})

        assert response.status_code == 404

    def test_update_and_delete(self, seeker):
        item_id = seeker.post("/api/seeker/portfolio", json={"title": "Draft"}).json()["item"]["id"]

        updated = seeker.patch(f"/api/seeker/portfolio/{item_id}", json={"title": "Final", "description": None})

        assert updated.status_code == 200
        assert updated.json()["item"]["title"] == "Final"
        assert seeker.get(f"/api/seeker/portfolio/{item_id}").json()["item"]["title"] == "Final"
        assert seeker.delete(f"/api/seeker/portfolio/{item_id}").status_code == 200
        assert seeker.get(f"/api/seeker/portfolio/{item_id}").status_code == 404

    def test_blank_title_rejected(self, seeker):
        item_id = seeker.post("/api/seeker/portfolio", json={"title": "Draft"}).json()["item"]["id"]

        response = seeker.patch(f"/api/seeker/portfolio/{item_id}", json={"title": "   "})

        assert response.status_code == 400

    def test_other_seekers_item(self, seeker, make_user):
        other = make_user("seeker")
        item_id = other.post("/api/seeker/portfolio", json={"title": "Mine"}).json()["item"]["id"]

        assert seeker.get(f"/api/seeker/portfolio/{item_id}").status_code == 403
        assert seeker.delete(f"/api/seeker/portfolio/{item_id}").status_code == 403


class TestCatalog:

    def test_skills_sorted_by_name(self, anon_client, skills):
        names = [s["name"] for s in anon_client.get("/api/skills").json()["skills"]]

        assert len(names) == len(skills)
        assert names == sorted(names)

    def test_regions_with_districts(self, anon_client):
        with get_db_session() as db:
            seed_locations(db)

        regions = anon_client.get("/api/locations/regions").json()["regions"]

        assert [r["name"] for r in regions] == ["Eastern", "North West", "Northern", "Southern", "Western Area"]
        assert [d["name"] for d in regions[0]["districts"]] == ["Kailahun", "Kenema", "Kono"]
        assert [d["name"] for d in regions[-1]["districts"]] == ["Western Area Rural", "Western Area Urban"]

    def test_seeding_is_idempotent(self, anon_client):
        with get_db_session() as db:
            first = seed_locations(db)
        with get_db_session() as db:
            second = seed_locations(db)

        assert first == 16
        assert second == 0
