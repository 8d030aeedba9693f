"""
Tests for public freelancer browsing and employer talent search.
"""

from skillshub.db.database import get_db_session
from skillshub.models import Address, RegionSL, User
from helpers import create_job, seeker_profile_id


def _profile(client, skill_ids=(), **fields):
    for skill_id in skill_ids:
        assert client.post("/api/seeker/skills", json={"skillId": skill_id}).status_code == 201
    if fields:
        assert client.patch("/api/profile/seeker", json=fields).status_code == 200
    return seeker_profile_id(client)


class TestFreelancers:

    def test_top_three_by_experience(self, anon_client, make_user):
        for years in (1, 8, None, 3, 10):
            client = make_user("seeker")
            if years is not None:
                _profile(client, yearsExperience=years)

        response = anon_client.get("/api/freelancers/top")

        assert response.status_code == 200
        assert [f["yearsExperience"] for f in response.json()["freelancers"]] == [10, 8, 3]

    def test_unverified_seekers_are_hidden(self, anon_client, make_user):
        make_user("seeker")
        anon_client.post("/api/auth/signup/seeker", json={
            "firstName": "Hidden", "lastName": "User", "email": "hidden@skillshub.sl",
            "username": "hidden", "password": "secret123", "pathway": "STUDENT",
        })

        freelancers = anon_client.get("/api/freelancers/available").json()["freelancers"]

        assert len(freelancers) == 1
        assert freelancers[0]["name"] == "Mariama Kamara"

    def test_available_filters(self, anon_client, make_user):
        tailor = make_user("seeker", firstName="Isatu", lastName="Conteh", pathway="ARTISAN")
        _profile(tailor, profession="Tailor", yearsExperience=8)
        student = make_user("seeker", firstName="Ahmed", lastName="Koroma", pathway="STUDENT")
        _profile(student, profession="Web Developer", yearsExperience=0)

        artisans = anon_client.get("/api/freelancers/available", params={"pathway": "ARTISAN"}).json()
        experienced = anon_client.get("/api/freelancers/available", params={"minExperience": 5}).json()
        searched = anon_client.get("/api/freelancers/available", params={"search": "web dev"}).json()
        everyone = anon_client.get("/api/freelancers/available", params={"pathway": "all"}).json()

        assert [f["name"] for f in artisans["freelancers"]] == ["Isatu Conteh"]
        assert [f["name"] for f in experienced["freelancers"]] == ["Isatu Conteh"]
        assert [f["name"] for f in searched["freelancers"]] == ["Ahmed Koroma"]
        assert len(everyone["freelancers"]) == 2

    def test_search_underscore_is_literal(self, anon_client, make_user):
        coder = make_user("seeker", firstName="Ahmed", lastName="Koroma")
        _profile(coder, profession="snake_case Python developer")
        welder = make_user("seeker", firstName="Isatu", lastName="Conteh")
        _profile(welder, profession="Welder and fence contractor")

        found = anon_client.get("/api/freelancers/available", params={"search": "e_c"}).json()["freelancers"]

        assert [f["name"] for f in found] == ["Ahmed Koroma"]

    def test_card_defaults(self, anon_client, seeker):
        [card] = anon_client.get("/api/freelancers/available").json()["freelancers"]

        assert card["profession"] == "Professional"
        assert card["headline"] == ""
        assert card["yearsExperience"] == 0
        assert card["skills"] == []

    def test_public_profile(self, anon_client, seeker, skills):
        profile_id = _profile(seeker, [skills["tailoring"]], profession="Tailor")
        seeker.post("/api/seeker/portfolio", json={"title": "Kaba slot collection"})

        response = anon_client.get(f"/api/freelancers/{profile_id}")

        assert response.status_code == 200
        freelancer = response.json()["freelancer"]
        assert freelancer["name"] == "Mariama Kamara"
        assert freelancer["skills"][0]["slug"] == "tailoring"
        assert freelancer["portfolio"][0]["title"] == "Kaba slot collection"
        assert "email" not in freelancer

    def test_unknown_freelancer(self, anon_client):
        assert anon_client.get("/api/freelancers/999").status_code == 404


class TestTalents:

    def test_access_control(self, anon_client, seeker):
        assert anon_client.get("/api/talents").status_code == 401
        assert seeker.get("/api/talents").status_code == 403

    def test_ranked_by_overlap_with_open_jobs(self, employer, make_user, skills):
        fe, ux, weld = skills["frontend-development"], skills["ui-ux-design"], skills["welding"]
        create_job(employer, skills=[fe, ux])
        create_job(employer, skills=[weld], status="CLOSED")

        both = make_user("seeker", firstName="Hawa", lastName="Jalloh")
        _profile(both, [fe, ux])
        one = make_user("seeker", firstName="Ahmed", lastName="Koroma")
        _profile(one, [fe])
        welder = make_user("seeker", firstName="Alhaji", lastName="Sankoh")
        _profile(welder, [weld])

        body = employer.get("/api/talents").json()

        assert [(t["name"], t["matchScore"]) for t in body["talents"]] == [
            ("Hawa Jalloh", 100), ("Ahmed Koroma", 50)
        ]
        assert body["talents"][0]["matchingSkillsCount"] == 2
        assert body["pagination"]["total"] == 2

    def test_matching_disabled(self, employer, make_user, skills):
        create_job(employer, skills=[skills["welding"]])
        for _ in range(2):
            make_user("seeker")

        body = employer.get("/api/talents", params={"useMatching": "false"}).json()

        assert len(body["talents"]) == 2
        assert all(t["matchScore"] == 0 for t in body["talents"])

    def test_employer_without_open_jobs_sees_everyone(self, employer, make_user, skills):
        talent = make_user("seeker")
        _profile(talent, [skills["welding"]])
        make_user("seeker")

        body = employer.get("/api/talents").json()

        assert body["pagination"]["total"] == 2

    def test_filters(self, employer, make_user, skills):
        designer = make_user("seeker", firstName="Hawa", pathway="GRADUATE")
        _profile(designer, [skills["graphic-design"]], yearsExperience=3)
        artisan = make_user("seeker", firstName="Isatu", pathway="ARTISAN")
        _profile(artisan, [skills["tailoring"]], yearsExperience=8)

        by_skill = employer.get("/api/talents", params={"skillId": skills["tailoring"]}).json()
        by_pathway = employer.get("/api/talents", params={"pathway": "GRADUATE"}).json()
        by_experience = employer.get("/api/talents", params={"minExperience": 5}).json()
        by_email = employer.get("/api/talents", params={"search": designer.email}).json()

        assert [t["firstName"] for t in by_skill["talents"]] == ["Isatu"]
        assert [t["firstName"] for t in by_pathway["talents"]] == ["Hawa"]
        assert [t["firstName"] for t in by_experience["talents"]] == ["Isatu"]
        assert [t["firstName"] for t in by_email["talents"]] == ["Hawa"]

    def test_pagination(self, employer, make_user):
        for _ in range(3):
            make_user("seeker")

        body = employer.get("/api/talents", params={"limit": 2, "offset": 0}).json()

        assert len(body["talents"]) == 2
        assert body["pagination"] == {"total": 3, "limit": 2, "offset": 0, "hasMore": True}

    def test_talent_detail_with_address(self, employer, seeker):
        profile_id = seeker_profile_id(seeker)
        with get_db_session() as db:
            region = RegionSL(name="Western Area")
            db.add(region)
            db.flush()
            db.add(Address(user_id=seeker.user_id, city="Freetown", region_id=region.id))

        response = employer.get(f"/api/talents/{profile_id}")

        assert response.status_code == 200
        talent = response.json()["talent"]
        assert talent["email"] == seeker.email
        assert talent["address"]["city"] == "Freetown"
        assert talent["address"]["region"] == "Western Area"

    def test_talent_detail_without_address(self, employer, seeker):
        talent = employer.get(f"/api/talents/{seeker_profile_id(seeker)}").json()["talent"]

        assert talent["address"] is None

    def test_admin_can_browse(self, make_user):
        admin = make_user("seeker")
        with get_db_session() as db:
            db.get(User, admin.user_id).role = "ADMIN"

        response = admin.get("/api/talents")

        assert response.status_code == 200
        # The admin's own profile is no longer a JOB_SEEKER account
        assert response.json()["talents"] == []

    def test_unknown_talent(self, employer):
        assert employer.get("/api/talents/999").status_code == 404
