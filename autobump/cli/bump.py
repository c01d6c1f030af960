"""Bump command implementation."""

import sys

import click

from ..changelog import ChangelogError, process_changelog
from ..config import read_lines, write_lines
from ..release import bump_remote_changelog, publish_changelog, release_section
from .options import parse_release_date


def show_release(version, lines):
    click.echo(f"Release {version}:")
    click.echo("=" * 50)
    click.echo("\n".join(release_section(lines, version)).strip())
    click.echo("=" * 50)


@click.command()
@click.option('--file', '-f', help='Changelog file path (default: CHANGELOG.md)')
@click.option('--project', '-p', help='GitLab project path or ID; bumps the remote changelog through a merge request')
@click.option('--ref', '-r', help='Branch holding the changelog (default: project default branch)')
@click.option('--date', 'release_date', callback=parse_release_date, help='Release date as YYYY-MM-DD (default: today)')
@click.option('--branch-prefix', help='Prefix of the release branch (default: chore/bump-)')
@click.option('--gitlab-host', help='GitLab host URL (overrides global setting)')
@click.option('--gitlab-token', help='GitLab API token (overrides global setting)')
@click.option('--dry-run', is_flag=True, help='Show what would be done without making changes')
@click.pass_context
def bump(ctx, file, project, ref, release_date, branch_prefix, gitlab_host, gitlab_token, dry_run):
    """Release the Unreleased section of a changelog as the next version."""
    
    base_config = ctx.obj['base_config']
    logger = ctx.obj['logger']
    file = file or base_config.changelog_file
    project = project or base_config.project
    
    if not project:
        bump_local(file, release_date, dry_run)
        return
    
    # Import here to avoid circular dependency
    from .main import create_client_for_project, resolve_ref
    
    client, config = create_client_for_project(ctx, project, gitlab_host, gitlab_token)
    ref = resolve_ref(client, config, project, ref)
    
    logger.info(f"Bumping {file} for project: {project}, ref: {ref}")
    
    version, lines, error = bump_remote_changelog(client, project, ref, file, release_date)
    if error:
        click.echo(f"Error: {error}", err=True)
        sys.exit(1)
    
    show_release(version, lines)
    
    if dry_run:
        click.echo("(Dry run - no changes made)")
        return
    
    mr_data, error = publish_changelog(
        client, project, ref, file, version, lines,
        branch_prefix or config.branch_prefix
    )
    if error:
        click.echo(f"Error: {error}", err=True)
        sys.exit(1)
    
    click.echo(f"Successfully created merge request: {mr_data['web_url']}")
    click.echo(f"Next version: {version}")


def bump_local(file, release_date, dry_run):
    """Release a changelog on the local filesystem in place."""
    try:
        lines = read_lines(file)
    except OSError as e:
        click.echo(f"Error reading {file}: {e}", err=True)
        sys.exit(1)
    
    try:
        version, new_lines = process_changelog(lines, release_date)
    except ChangelogError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    
    show_release(version, new_lines)
    
    if dry_run:
        click.echo("(Dry run - no changes made)")
    else:
        write_lines(file, new_lines)
        click.echo(f"Updated {file}")
    
    click.echo(f"Next version: {version}")
