"""Shared fixtures."""

from datetime import date

import pytest


RELEASE_DATE = date(2024, 5, 1)


class FakeGitLabClient:
    """In-memory stand-in for GitLabClient."""

    def __init__(self, files=None, default_branch="main"):
        # {(project, ref, path): content}
        self.files = dict(files or {})
        self.default_branch = default_branch
        self.branches = []
        self.commits = []
        self.merge_requests = []

    def get_default_branch(self, project):
        return self.default_branch

    def get_file(self, project, file_path, ref):
        return self.files.get((project, ref, file_path))

    def update_file(self, project, file_path, content, commit_message, branch):
        self.files[(project, branch, file_path)] = content
        self.commits.append({'project': project, 'branch': branch, 'file_path': file_path, 'message': commit_message})
        return True

    def create_branch(self, project, branch_name, ref):
        self.branches.append((project, branch_name, ref))
        for (proj, branch, path), content in list(self.files.items()):
            if proj == project and branch == ref:
                self.files[(project, branch_name, path)] = content
        return True

    def create_merge_request(self, project, source_branch, target_branch, title, description=""):
        iid = len(self.merge_requests) + 1
        mr = {
            'iid': iid,
            'title': title,
            'description': description,
            'source_branch': source_branch,
            'target_branch': target_branch,
            'web_url': f"https://gitlab.example.com/{project}/-/merge_requests/{iid}",
        }
        self.merge_requests.append(mr)
        return mr


@pytest.fixture
def release_date():
    return RELEASE_DATE


@pytest.fixture
def fake_client():
    return FakeGitLabClient()


@pytest.fixture
def fake_client_class():
    return FakeGitLabClient


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without AUTOBUMP_* variables and without config files in the working directory."""
    for name in ("GITLAB_HOST", "GITLAB_TOKEN", "PROJECT", "REF", "CHANGELOG_FILE", "BRANCH_PREFIX"):
        monkeypatch.delenv(f"AUTOBUMP_{name}", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path
