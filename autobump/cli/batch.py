"""Batch processing command implementation."""

import click
import json
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..changelog import NoChangesInUnreleasedError
from ..release import bump_remote_changelog, publish_changelog
from .options import parse_release_date


@click.command()
@click.option('--config', '-c', required=True, help='JSON config file with projects')
@click.option('--gitlab-host', help='GitLab host URL (overrides global setting)')
@click.option('--gitlab-token', help='GitLab API token (overrides global setting)')
@click.option('--date', 'release_date', callback=parse_release_date, help='Release date as YYYY-MM-DD (default: today)')
@click.option('--dry-run', is_flag=True, help='Show what would be done without making changes')
@click.option('--workers', default=4, help='Number of concurrent workers')
@click.pass_context
def batch(ctx, config, gitlab_host, gitlab_token, release_date, dry_run, workers):
    """Bump the changelogs of multiple projects.

    Config file format:
    {
        "projects": [
            {
                "project": "group/project1",
                "ref": "main"
            },
            {
                "project": "group/project2",
                "file": "docs/CHANGELOG.md",
                "gitlab_host": "https://custom.gitlab.com",
                "gitlab_token": "custom-token"
            }
        ]
    }
    """

    # Import here to avoid circular dependency
    from .main import create_client_for_project

    logger = ctx.obj['logger']
    base_config = ctx.obj['base_config']

    try:
        with open(config, 'r', encoding='utf-8') as f:
            batch_config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"Error loading batch config {config}: {e}", err=True)
        sys.exit(1)

    projects = batch_config.get('projects', [])
    if not projects:
        click.echo("No projects found in batch config", err=True)
        sys.exit(1)

    click.echo(f"Processing {len(projects)} projects with {workers} workers")

    def process_project(project_config):
        """Process a single project."""
        project = project_config.get('project', 'unknown')
        try:
            project_gitlab_host = project_config.get('gitlab_host', gitlab_host)
            project_gitlab_token = project_config.get('gitlab_token', gitlab_token)

            client, project_settings = create_client_for_project(
                ctx, project, project_gitlab_host, project_gitlab_token
            )

            ref = project_config.get('ref') or project_settings.ref or client.get_default_branch(project)
            if not ref:
                return {'project': project, 'status': 'error', 'message': 'Could not determine branch'}
            file_path = project_config.get('file', base_config.changelog_file)

            logger.info(f"Processing project: {project}, ref: {ref}")

            version, lines, error = bump_remote_changelog(client, project, ref, file_path, release_date)

            if isinstance(error, NoChangesInUnreleasedError):
                return {'project': project, 'status': 'empty', 'message': 'Nothing to release'}
            if error:
                return {'project': project, 'status': 'error', 'message': str(error)}

            if dry_run:
                return {
                    'project': project,
                    'status': 'dry-run',
                    'message': f'Would release {version}',
                    'version': version,
                }

            mr_data, error = publish_changelog(
                client, project, ref, file_path, version, lines,
                project_config.get('branch_prefix', project_settings.branch_prefix)
            )
            if error:
                return {'project': project, 'status': 'error', 'message': str(error)}

            return {
                'project': project,
                'status': 'success',
                'message': f"Release {version} proposed in {mr_data['web_url']}",
                'version': version,
            }

        except SystemExit:
            return {'project': project, 'status': 'error', 'message': 'Invalid GitLab settings'}
        except Exception as e:
            return {'project': project, 'status': 'error', 'message': str(e)}

    results = []
    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_project = {
            executor.submit(process_project, project_config): project_config
            for project_config in projects
        }

        for future in as_completed(future_to_project):
            result = future.result()
            results.append(result)

            status = result['status']
            project = result['project']

            if status == 'success':
                click.echo(f"✓ {project}: {result['message']}")
            elif status == 'error':
                click.echo(f"✗ {project}: {result['message']}", err=True)
            elif status == 'empty':
                click.echo(f"- {project}: {result['message']}")
            elif status == 'dry-run':
                click.echo(f"? {project}: {result['message']}")

    success_count = sum(1 for r in results if r['status'] in ['success', 'dry-run'])
    error_count = sum(1 for r in results if r['status'] == 'error')
    empty_count = sum(1 for r in results if r['status'] == 'empty')

    click.echo(f"\nSummary: {success_count} succeeded, {error_count} failed, {empty_count} empty")

    if error_count:
        sys.exit(1)
