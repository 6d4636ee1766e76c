"""
Test suite for the server-rendered pages.
"""

import pytest


@pytest.fixture
def registered(client, fake_registry):
    fake_registry.add_host("registry.example:5000", repositories={
        "library/nginx": {
            "tags": ["1.25", "1.27", "1.26"],
            "labels": {"org.opencontainers.image.source": "https://github.com/nginxinc/docker-nginx"},
        },
        "internal/tool": {"tags": ["v1"], "labels": {"org.opencontainers.image.source": "https://gitlab.com/x/y"}},
    })
    fake_registry.add_host("mirror.example")
    fake_registry.readmes["/nginxinc/docker-nginx/master/README.md"] = (
        "<!-- badges -->\n# About this Repo\n<!-- more\nbadges -->\nOfficial image"
    )
    client.post("/api/registry", json={"name": "local", "url": "http://registry.example:5000"})
    client.post("/api/registry", json={"name": "mirror", "url": "https://mirror.example"})
    return client


class TestHomePage:

    def test_empty_store(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "No endpoint available" in response.text

    def test_lists_registries(self, registered):
        response = registered.get("/")

        assert 'href="/images/1"' in response.text
        assert 'href="/images/2"' in response.text
        assert "http://registry.example:5000" in response.text

    def test_filters_by_query(self, registered):
        response = registered.get("/", params={"q": "MIRROR"})

        assert 'href="/images/2"' in response.text
        assert 'href="/images/1"' not in response.text


class TestImagesPage:

    def test_lists_images(self, registered):
        response = registered.get("/images/1")

        assert response.status_code == 200
        assert 'href="/image/1/library/nginx"' in response.text
        assert 'href="/image/1/internal/tool"' in response.text

    def test_empty_registry(self, registered):
        response = registered.get("/images/2")

        assert "No image available" in response.text

    def test_unknown_registry_redirects_home(self, client):
        response = client.get("/images/7", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"


class TestImagePage:

    def test_shows_pull_command_for_newest_tag(self, registered):
        response = registered.get("/image/1/library/nginx")

        assert response.status_code == 200
        assert "docker pull registry.example:5000/library/nginx:1.27" in response.text

    def test_shows_rendered_readme_without_html_comments(self, registered):
        response = registered.get("/image/1/library/nginx")

        assert "<h1>About this Repo</h1>" in response.text
        assert "Official image" in response.text
        assert "badges" not in response.text

    def test_non_github_source_has_no_readme(self, registered, fake_registry):
        response = registered.get("/image/1/internal/tool")

        assert response.status_code == 200
        assert 'class="readme"' not in response.text
        assert all(r.url.host != "raw.githubusercontent.com" for r in fake_registry.requests)

    def test_missing_readme_still_renders(self, registered, fake_registry):
        del fake_registry.readmes["/nginxinc/docker-nginx/master/README.md"]

        response = registered.get("/image/1/library/nginx")

        assert response.status_code == 200
        assert "docker pull" in response.text
        assert 'class="readme"' not in response.text

    def test_unknown_image_redirects_home(self, registered):
        response = registered.get("/image/1/missing", follow_redirects=False)

        assert response.status_code == 303


class TestTagsPage:

    def test_lists_tags_newest_first(self, registered):
        response = registered.get("/tags/1/library/nginx")

        text = response.text
        assert response.status_code == 200
        assert text.index(">1.27<") < text.index(">1.26<") < text.index(">1.25<")
        assert "docker pull registry.example:5000/library/nginx:1.26" in text

    def test_unknown_registry_redirects_home(self, client):
        response = client.get("/tags/3/library/nginx", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
