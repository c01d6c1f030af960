"""GitLab client wrapper using python-gitlab library."""

import logging
from typing import Optional, Dict, Any

import gitlab
from gitlab.v4.objects import Project

from ..config import Config


class GitLabClient:
    """Access to the repository files and merge requests a changelog bump needs."""
    
    def __init__(self, config: Config, logger: Optional[logging.Logger] = None):
        """Initialize GitLab client.
        
        Args:
            config: Configuration object containing GitLab settings
            logger: Logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        
        self.gl = gitlab.Gitlab(
            url=config.gitlab_host,
            private_token=config.gitlab_token,
            timeout=300
        )
        
        self._project_cache: Dict[str, Project] = {}
    
    def _get_project(self, project_name: str) -> Project:
        """Get project instance with caching."""
        if project_name not in self._project_cache:
            self._project_cache[project_name] = self.gl.projects.get(project_name)
        return self._project_cache[project_name]
    
    def get_default_branch(self, project: str) -> Optional[str]:
        """Get the default branch of a project.
        
        Args:
            project: Project name or ID
            
        Returns:
            Branch name or None if it cannot be determined
        """
        try:
            return self._get_project(project).default_branch
        except Exception as e:
            self.logger.error(f"Error getting default branch of {project}: {e}")
            return None
    
    def get_file(self, project: str, file_path: str, ref: str) -> Optional[str]:
        """Get file content from repository.
        
        Args:
            project: Project name or ID
            file_path: Path to file
            ref: Git reference (branch/commit)
            
        Returns:
            File content as string or None if not found
        """
        try:
            proj = self._get_project(project)
            file_obj = proj.files.get(file_path, ref=ref)
            return file_obj.decode().decode('utf-8')
        except Exception as e:
            self.logger.warning(f"Error getting file {file_path}: {e}")
            return None
    
    def update_file(self, project: str, file_path: str, content: str, 
                    commit_message: str, branch: str) -> bool:
        """Commit new content for a file, creating it when missing.
        
        Args:
            project: Project name or ID
            file_path: Path to file
            content: New file content
            commit_message: Commit message
            branch: Target branch
            
        Returns:
            True if successful, False otherwise
        """
        try:
            proj = self._get_project(project)
            
            try:
                file_obj = proj.files.get(file_path, ref=branch)
                file_obj.content = content
                file_obj.save(branch=branch, commit_message=commit_message)
            except gitlab.GitlabGetError:
                proj.files.create({
                    'file_path': file_path,
                    'content': content,
                    'commit_message': commit_message,
                    'branch': branch,
                })
            
            return True
        except Exception as e:
            self.logger.error(f"Error updating file {file_path}: {e}")
            return False
    
    def create_branch(self, project: str, branch_name: str, ref: str) -> bool:
        """Create a new branch.
        
        Args:
            project: Project name or ID
            branch_name: New branch name
            ref: Source reference
            
        Returns:
            True if successful, False otherwise
        """
        try:
            proj = self._get_project(project)
            proj.branches.create({
                'branch': branch_name,
                'ref': ref,
            })
            return True
        except Exception as e:
            self.logger.error(f"Error creating branch {branch_name}: {e}")
            return False
    
    def create_merge_request(self, project: str, source_branch: str, target_branch: str,
                           title: str, description: str = "") -> Optional[Dict[str, Any]]:
        """Open a merge request.
        
        Args:
            project: Project name or ID  
            source_branch: Source branch name
            target_branch: Target branch name
            title: MR title
            description: MR description
            
        Returns:
            Created merge request data or None if failed
        """
        try:
            proj = self._get_project(project)
            mr = proj.mergerequests.create({
                'source_branch': source_branch,
                'target_branch': target_branch,
                'title': title,
                'description': description,
                'remove_source_branch': True,
            })
            
            return {
                'iid': mr.iid,
                'title': mr.title,
                'web_url': mr.web_url,
                'source_branch': mr.source_branch,
                'target_branch': mr.target_branch,
                'state': mr.state,
            }
        except Exception as e:
            self.logger.error(f"Error creating merge request: {e}")
            return None
