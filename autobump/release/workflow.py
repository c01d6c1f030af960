"""Changelog release workflow against a GitLab project."""

import logging
from datetime import date
from typing import List, Dict, Any, Optional, Tuple

from ..changelog import ChangelogError, insert_changelog_entry, process_changelog


COMMIT_MESSAGE_BUMP = "chore(release): update {file} for {version}"
COMMIT_MESSAGE_INSERT = "docs(changelog): add entries to {file}"
MR_TITLE = "chore(release): release {version}"


def release_section(lines: List[str], version: str) -> List[str]:
    """Extract the body of a released version from changelog lines.
    
    Args:
        lines: Changelog lines
        version: Released version
        
    Returns:
        Lines between the version heading and the next ``## [`` heading
    """
    heading = f"## [{version}]"
    section = []
    inside = False
    
    for line in lines:
        if line.startswith(heading):
            inside = True
            continue
        if inside and line.startswith("## ["):
            break
        if inside:
            section.append(line)
    
    return section


def bump_remote_changelog(client, project: str, ref: str, file_path: str,
                          today: Optional[date] = None) -> Tuple[Optional[str], List[str], Optional[Exception]]:
    """Fetch a changelog from a project and release its Unreleased section.
    
    Args:
        client: GitLab client instance
        project: Project name or ID
        ref: Git reference (branch) holding the changelog
        file_path: Changelog path inside the repository
        today: Release date, defaults to the current date
        
    Returns:
        Tuple of (next version, new changelog lines, error)
    """
    logger = logging.getLogger(__name__)
    
    content = client.get_file(project, file_path, ref)
    if content is None:
        return None, [], Exception(f"Could not read {file_path} from {project}@{ref}")
    
    try:
        version, lines = process_changelog(content.splitlines(), today)
    except ChangelogError as e:
        logger.error(f"Error processing {file_path} of {project}: {e}")
        return None, [], e
    
    logger.info(f"{project}: next version is {version}")
    return version, lines, None


def publish_changelog(client, project: str, ref: str, file_path: str, version: str,
                      lines: List[str], branch_prefix: str) -> Tuple[Optional[Dict[str, Any]], Optional[Exception]]:
    """Commit a released changelog to a new branch and open a merge request.
    
    Args:
        client: GitLab client instance
        project: Project name or ID
        ref: Target branch of the merge request
        file_path: Changelog path inside the repository
        version: Released version
        lines: New changelog lines
        branch_prefix: Prefix of the release branch name
        
    Returns:
        Tuple of (merge request data, error)
    """
    logger = logging.getLogger(__name__)
    branch_name = f"{branch_prefix}{version}"
    
    logger.info(f"Creating branch: {branch_name}")
    if not client.create_branch(project, branch_name, ref):
        return None, Exception(f"Failed to create branch {branch_name}")
    
    logger.info(f"Updating {file_path}")
    content = "\n".join(lines) + "\n"
    message = COMMIT_MESSAGE_BUMP.format(file=file_path, version=version)
    if not client.update_file(project, file_path, content, message, branch_name):
        return None, Exception(f"Failed to update {file_path} in branch {branch_name}")
    
    notes = "\n".join(release_section(lines, version)).strip()
    description = f"Automated release of version {version}.\n\n{notes}"
    
    logger.info("Creating merge request for changelog update")
    mr_data = client.create_merge_request(
        project,
        branch_name,
        ref,
        MR_TITLE.format(version=version),
        description
    )
    if not mr_data:
        return None, Exception(f"Failed to create merge request, changelog was updated in branch: {branch_name}")
    
    return mr_data, None


def insert_remote_entries(client, project: str, ref: str, file_path: str,
                          entries: List[str]) -> Tuple[bool, Optional[Exception]]:
    """Append entries to the Unreleased section of a remote changelog.
    
    Args:
        client: GitLab client instance
        project: Project name or ID
        ref: Branch to commit to
        file_path: Changelog path inside the repository
        entries: Bullet lines to insert
        
    Returns:
        Tuple of (changed, error)
    """
    content = client.get_file(project, file_path, ref)
    if content is None:
        return False, Exception(f"Could not read {file_path} from {project}@{ref}")
    
    new_content = insert_changelog_entry(content, entries)
    if new_content == content:
        return False, None
    
    message = COMMIT_MESSAGE_INSERT.format(file=file_path)
    if not client.update_file(project, file_path, new_content, message, ref):
        return False, Exception(f"Failed to update {file_path} on {ref}")
    
    return True, None
