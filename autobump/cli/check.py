"""Check command implementation."""

import sys

import click

from ..changelog import ChangelogError, is_unreleased_empty
from ..config import read_lines


@click.command()
@click.option('--file', '-f', help='Changelog file path (default: CHANGELOG.md)')
@click.option('--project', '-p', help='GitLab project path or ID')
@click.option('--ref', '-r', help='Branch holding the changelog (default: project default branch)')
@click.option('--gitlab-host', help='GitLab host URL (overrides global setting)')
@click.option('--gitlab-token', help='GitLab API token (overrides global setting)')
@click.pass_context
def check(ctx, file, project, ref, gitlab_host, gitlab_token):
    """Exit with status 1 when the Unreleased section is empty.
    
    Exit status 2 means the changelog could not be read or parsed.
    """
    
    base_config = ctx.obj['base_config']
    file = file or base_config.changelog_file
    project = project or base_config.project
    
    if project:
        # Import here to avoid circular dependency
        from .main import create_client_for_project, resolve_ref
        
        client, config = create_client_for_project(ctx, project, gitlab_host, gitlab_token)
        ref = resolve_ref(client, config, project, ref)
        content = client.get_file(project, file, ref)
        if content is None:
            click.echo(f"Error: Could not read {file} from {project}@{ref}", err=True)
            sys.exit(2)
        lines = content.splitlines()
    else:
        try:
            lines = read_lines(file)
        except OSError as e:
            click.echo(f"Error reading {file}: {e}", err=True)
            sys.exit(2)
    
    try:
        empty = is_unreleased_empty(lines)
    except ChangelogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    
    if empty:
        click.echo("Unreleased section is empty")
        sys.exit(1)
    
    click.echo("Unreleased section has changes")
