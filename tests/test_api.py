"""
HTTP tests for the catalog endpoints.
"""

import uuid

import pytest

from apps.catalog.models import Domain, Image, Project, SubDomain
from tests.helpers import reload

SUBDOMAINS_URL = "/api/subdomains/"


def detail_url(sub_domain_id):
    return f"{SUBDOMAINS_URL}{sub_domain_id}/"


@pytest.mark.django_db
class TestSubDomainList:

    def test_list_is_public_and_paginated(self, anon_client, make_node, make_project):
        root = make_node("Alpha")
        child = make_node("Beta", parent=root)
        make_project(child, "Weather station")

        response = anon_client.get(SUBDOMAINS_URL)

        assert response.status_code == 200
        assert response.data["count"] == 2
        rows = {row["title"]: row for row in response.data["results"]}
        assert rows["Alpha"]["children_count"] == 1
        assert rows["Alpha"]["is_leaf"] is False
        assert rows["Beta"]["project_count"] == 1
        assert rows["Beta"]["domain"]["slug"] == "electronics"

    def test_filters(self, anon_client, make_node, other_domain):
        root = make_node("Alpha")
        child = make_node("Beta", parent=root)
        make_node("Compilers", on_domain=other_domain)

        roots = anon_client.get(SUBDOMAINS_URL, {"parent": "null"})
        children = anon_client.get(SUBDOMAINS_URL, {"parent": str(root.id)})
        leaves = anon_client.get(SUBDOMAINS_URL, {"is_leaf": "true", "domain": str(root.domain_id)})
        level_two = anon_client.get(SUBDOMAINS_URL, {"level": "2"})

        assert {row["title"] for row in roots.data["results"]} == {"Alpha", "Compilers"}
        assert [row["id"] for row in children.data["results"]] == [str(child.id)]
        assert [row["title"] for row in leaves.data["results"]] == ["Beta"]
        assert [row["title"] for row in level_two.data["results"]] == ["Beta"]

    def test_malformed_filter_matches_nothing(self, anon_client, make_node):
        make_node("Alpha")

        response = anon_client.get(SUBDOMAINS_URL, {"domain": "not-a-uuid"})

        assert response.status_code == 200
        assert response.data["count"] == 0

    def test_limit_controls_page_size(self, anon_client, make_node):
        for index in range(3):
            make_node(f"Node {index}")

        response = anon_client.get(SUBDOMAINS_URL, {"limit": 2})

        assert response.data["count"] == 3
        assert len(response.data["results"]) == 2
        assert response.data["next"] is not None


@pytest.mark.django_db
class TestSubDomainWrites:

    def test_create(self, api_client, domain):
        root = api_client.post(SUBDOMAINS_URL, {"domain": str(domain.id), "title": "Alpha"}, format="json")
        child = api_client.post(
            SUBDOMAINS_URL,
            {"domain": str(domain.id), "title": "Beta", "parent": root.data["data"]["id"]},
            format="json",
        )

        assert root.status_code == 201
        assert child.status_code == 201
        assert child.data["message"] == "SubDomain created successfully"
        assert child.data["data"]["level"] == 2
        assert child.data["data"]["is_leaf"] is True
        assert SubDomain.objects.get(id=root.data["data"]["id"]).is_leaf is False

    def test_anonymous_writes_are_rejected(self, anon_client, domain, make_node):
        node = make_node("Alpha")

        create = anon_client.post(SUBDOMAINS_URL, {"domain": str(domain.id), "title": "Beta"}, format="json")
        delete = anon_client.delete(detail_url(node.id))

        assert create.status_code == 401
        assert delete.status_code == 401
        assert SubDomain.objects.count() == 1

    def test_derived_fields_in_input_are_ignored(self, api_client, domain):
        response = api_client.post(
            SUBDOMAINS_URL,
            {"domain": str(domain.id), "title": "Alpha", "level": 4, "is_leaf": False},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["data"]["level"] == 1
        assert response.data["data"]["is_leaf"] is True

    def test_create_errors(self, api_client, domain, other_domain, make_node):
        make_node("Alpha")
        foreign = make_node("Compilers", on_domain=other_domain)

        duplicate = api_client.post(SUBDOMAINS_URL, {"domain": str(domain.id), "title": "ALPHA"}, format="json")
        cross_domain = api_client.post(
            SUBDOMAINS_URL,
            {"domain": str(domain.id), "title": "Beta", "parent": str(foreign.id)},
            format="json",
        )
        missing_domain = api_client.post(SUBDOMAINS_URL, {"domain": str(uuid.uuid4()), "title": "Beta"}, format="json")
        bad_input = api_client.post(SUBDOMAINS_URL, {"domain": str(domain.id), "title": "B"}, format="json")

        assert duplicate.status_code == 409
        assert duplicate.data["error_code"] == "ConflictError"
        assert cross_domain.status_code == 400
        assert cross_domain.data["error_code"] == "InvalidReferenceError"
        assert missing_domain.status_code == 404
        assert missing_domain.data["resource_type"] == "Domain"
        assert bad_input.status_code == 400
        assert "title" in bad_input.data["errors"]

    def test_depth_exceeded(self, api_client, domain, make_node):
        parent = None
        for depth in range(1, 6):
            parent = make_node(f"Level {depth}", parent=parent)

        response = api_client.post(
            SUBDOMAINS_URL,
            {"domain": str(domain.id), "title": "Level 6", "parent": str(parent.id)},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["error_code"] == "DepthExceededError"
        assert response.data["error"] == "Maximum nesting level exceeded"

    def test_patch_updates_fields_and_slug(self, api_client, make_node):
        node = make_node("Alpha")

        response = api_client.patch(detail_url(node.id), {"title": "Alpha Prime", "is_active": False}, format="json")

        assert response.status_code == 200
        assert response.data["data"]["slug"] == "alpha-prime"
        assert reload(node).is_active is False

    def test_patch_with_parent_moves(self, api_client, make_node):
        a = make_node("Alpha")
        b = make_node("Beta")

        response = api_client.patch(detail_url(b.id), {"parent": str(a.id)}, format="json")

        assert response.status_code == 200
        assert response.data["data"]["level"] == 2
        assert response.data["data"]["parent"] == a.id
        assert reload(a).is_leaf is False

    def test_reparent_action(self, api_client, make_node):
        a = make_node("Alpha")
        b = make_node("Beta", parent=a)
        c = make_node("Gamma", parent=b)

        to_root = api_client.post(f"{detail_url(c.id)}reparent/", {"parent": None}, format="json")
        cycle = api_client.post(f"{detail_url(a.id)}reparent/", {"parent": str(b.id)}, format="json")

        assert to_root.status_code == 200
        assert to_root.data["data"]["level"] == 1
        assert reload(b).is_leaf is True
        assert cycle.status_code == 400
        assert cycle.data["error_code"] == "CircularReferenceError"
        assert reload(a).parent_id is None

    def test_delete_requires_force_for_branches(self, api_client, make_node, make_project, make_image):
        a = make_node("Alpha")
        b = make_node("Beta", parent=a)
        project = make_project(b, "Weather station")
        make_image(Image.ENTITY_PROJECT, project.id)

        refused = api_client.delete(detail_url(a.id))
        forced = api_client.delete(f"{detail_url(a.id)}?force=true")
        again = api_client.delete(f"{detail_url(a.id)}?force=true")

        assert refused.status_code == 409
        assert refused.data["children_count"] == 1
        assert forced.status_code == 200
        assert forced.data["data"]["deleted"] == {"sub_domains": 2, "projects": 1, "images": 1}
        assert "warnings" not in forced.data
        assert again.status_code == 404
        assert not Project.objects.exists()


@pytest.mark.django_db
class TestSubDomainReads:

    def test_detail(self, anon_client, make_node, make_project, make_image):
        a = make_node("Alpha")
        b = make_node("Beta", parent=a)
        make_project(b, "Weather station")
        make_project(b, "Archived", is_active=False)
        make_image(Image.ENTITY_SUB_DOMAIN, b.id)

        response = anon_client.get(detail_url(b.id))

        assert response.status_code == 200
        data = response.data["data"]
        assert data["parent"]["id"] == str(a.id)
        assert data["children"] == []
        assert [project["title"] for project in data["projects"]] == ["Weather station"]
        assert len(data["images"]) == 1

    def test_detail_not_found(self, anon_client):
        response = anon_client.get(detail_url(uuid.uuid4()))

        assert response.status_code == 404
        assert response.data["error_code"] == "NotFoundError"

    def test_leafs(self, anon_client, make_node, make_project):
        a = make_node("Alpha")
        b = make_node("Beta", parent=a)
        make_project(b, "Weather station")

        response = anon_client.get(f"{SUBDOMAINS_URL}leafs/", {"domain": str(a.domain_id)})

        assert response.status_code == 200
        assert [row["id"] for row in response.data["data"]] == [str(b.id)]
        assert response.data["data"][0]["project_count"] == 1

    def test_domain_tree(self, anon_client, domain, make_node, make_project):
        a = make_node("Alpha")
        b = make_node("Beta", parent=a)
        make_node("Dormant", is_active=False)
        make_project(b, "Weather station")

        response = anon_client.get(f"/api/domains/{domain.id}/subdomains/", {"include_projects": "true"})
        with_inactive = anon_client.get(f"/api/domains/{domain.id}/subdomains/", {"include_inactive": "true"})

        assert response.status_code == 200
        tree = response.data["data"]["sub_domains"]
        assert [node["title"] for node in tree] == ["Alpha"]
        assert tree[0]["children"][0]["projects"][0]["title"] == "Weather station"
        assert len(with_inactive.data["data"]["sub_domains"]) == 2

    def test_domain_tree_unknown_domain(self, anon_client):
        response = anon_client.get(f"/api/domains/{uuid.uuid4()}/subdomains/")

        assert response.status_code == 404


@pytest.mark.django_db
class TestDomains:

    def test_create_sets_slug(self, api_client):
        response = api_client.post("/api/domains/", {"title": "Embedded Systems"}, format="json")

        assert response.status_code == 201
        assert response.data["slug"] == "embedded-systems"

    def test_delete_blocked_while_sub_domains_exist(self, api_client, domain, make_node):
        make_node("Alpha")

        response = api_client.delete(f"/api/domains/{domain.id}/")

        assert response.status_code == 409
        assert Domain.objects.filter(id=domain.id).exists()

    def test_delete_empty_domain_removes_images(self, api_client, domain, make_image):
        make_image(Image.ENTITY_DOMAIN, domain.id)

        response = api_client.delete(f"/api/domains/{domain.id}/")

        assert response.status_code == 200
        assert not Domain.objects.filter(id=domain.id).exists()
        assert not Image.objects.exists()


@pytest.mark.django_db
class TestProjects:

    def test_create_under_sub_domain(self, api_client, make_node):
        node = make_node("Alpha")
        payload = {
            "title": "Line Follower Robot",
            "abstract": "abstract",
            "specifications": "specs",
            "learning_outcomes": "outcomes",
        }

        response = api_client.post(f"{detail_url(node.id)}projects/", payload, format="json")

        assert response.status_code == 201
        assert response.data["slug"] == "line-follower-robot"
        assert response.data["sub_domain"] == node.id

    def test_create_under_branch_is_refused(self, api_client, make_node):
        alpha = make_node("Alpha")
        make_node("Beta", parent=alpha)
        payload = {
            "title": "Line Follower Robot",
            "abstract": "abstract",
            "specifications": "specs",
            "learning_outcomes": "outcomes",
        }

        response = api_client.post(f"{detail_url(alpha.id)}projects/", payload, format="json")

        assert response.status_code == 400
        assert response.data["error_code"] == "InvalidReferenceError"
        assert response.data["error"] == "Projects can only be added to leaf subdomains"
        assert not Project.objects.exists()

    def test_create_under_missing_sub_domain(self, api_client):
        payload = {
            "title": "Line Follower Robot",
            "abstract": "abstract",
            "specifications": "specs",
            "learning_outcomes": "outcomes",
        }

        response = api_client.post(f"{detail_url(uuid.uuid4())}projects/", payload, format="json")

        assert response.status_code == 404

    def test_project_under_wrong_sub_domain(self, anon_client, make_node, make_project):
        a = make_node("Alpha")
        b = make_node("Beta")
        project = make_project(a, "Weather station")

        response = anon_client.get(f"{detail_url(b.id)}projects/{project.id}/")

        assert response.status_code == 400
        assert response.data["error_code"] == "InvalidReferenceError"

    def test_delete_removes_images(self, api_client, make_node, make_project, make_image):
        node = make_node("Alpha")
        project = make_project(node, "Weather station")
        make_image(Image.ENTITY_PROJECT, project.id)

        response = api_client.delete(f"{detail_url(node.id)}projects/{project.id}/")

        assert response.status_code == 200
        assert not Project.objects.exists()
        assert not Image.objects.exists()
