"""Insert command implementation."""

import sys

import click

from ..changelog import insert_changelog_entry
from ..release import insert_remote_entries
from .options import as_bullet


@click.command()
@click.option('--entry', '-e', 'entries', multiple=True, required=True, help='Entry text; repeat for several entries')
@click.option('--file', '-f', help='Changelog file path (default: CHANGELOG.md)')
@click.option('--project', '-p', help='GitLab project path or ID; commits to the remote changelog')
@click.option('--ref', '-r', help='Branch to commit to (default: project default branch)')
@click.option('--gitlab-host', help='GitLab host URL (overrides global setting)')
@click.option('--gitlab-token', help='GitLab API token (overrides global setting)')
@click.pass_context
def insert(ctx, entries, file, project, ref, gitlab_host, gitlab_token):
    """Add entries to the Changed subsection of the Unreleased section."""
    
    base_config = ctx.obj['base_config']
    file = file or base_config.changelog_file
    project = project or base_config.project
    bullets = [as_bullet(entry) for entry in entries]
    
    if not project:
        try:
            with open(file, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            click.echo(f"Error reading {file}: {e}", err=True)
            sys.exit(1)
        
        new_content = insert_changelog_entry(content, bullets)
        if new_content == content:
            click.echo(f"No [Unreleased] section in {file}, nothing inserted")
            return
        
        with open(file, 'w', encoding='utf-8') as f:
            f.write(new_content)
        click.echo(f"Added {len(bullets)} entries to {file}")
        return
    
    # Import here to avoid circular dependency
    from .main import create_client_for_project, resolve_ref
    
    client, config = create_client_for_project(ctx, project, gitlab_host, gitlab_token)
    ref = resolve_ref(client, config, project, ref)
    
    changed, error = insert_remote_entries(client, project, ref, file, bullets)
    if error:
        click.echo(f"Error: {error}", err=True)
        sys.exit(1)
    
    if changed:
        click.echo(f"Added {len(bullets)} entries to {file} on {project}@{ref}")
    else:
        click.echo(f"No [Unreleased] section in {file}, nothing inserted")
