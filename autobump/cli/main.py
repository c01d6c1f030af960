"""Main CLI entry point for Autobump."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config, create_sample_config, Config
from ..gitlab import GitLabClient
from .bump import bump
from .insert import insert
from .check import check
from .batch import batch


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--gitlab-host', help='GitLab host URL (can also be set per command)')
@click.option('--gitlab-token', help='GitLab API token (can also be set per command)')
@click.option('--config-file', '-c', help='Path or URL of JSON configuration file')
@click.version_option(version=__version__, prog_name="autobump")
@click.pass_context
def cli(ctx, debug, gitlab_host, gitlab_token, config_file):
    """Autobump - changelog-driven release automation."""
    
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    base_config = get_config(config_file)
    
    # Global options for subcommands
    ctx.ensure_object(dict)
    ctx.obj['base_config'] = base_config
    ctx.obj['global_gitlab_host'] = gitlab_host
    ctx.obj['global_gitlab_token'] = gitlab_token
    ctx.obj['logger'] = logging.getLogger('autobump')


def create_client_for_project(ctx, project, gitlab_host=None, gitlab_token=None):
    """Create GitLab client for a specific project with configuration precedence."""
    base_config = ctx.obj['base_config']
    logger = ctx.obj['logger']
    
    config = Config(
        gitlab_host=gitlab_host or ctx.obj['global_gitlab_host'] or base_config.gitlab_host,
        gitlab_token=gitlab_token or ctx.obj['global_gitlab_token'] or base_config.gitlab_token,
        project=project or base_config.project,
        ref=base_config.ref,
        changelog_file=base_config.changelog_file,
        branch_prefix=base_config.branch_prefix,
    )
    
    if not config.gitlab_token:
        click.echo("Error: GitLab token is required. Set AUTOBUMP_GITLAB_TOKEN, use --gitlab-token, or config file", err=True)
        sys.exit(1)
    
    if not config.project:
        click.echo("Error: Project is required. Use --project or config file", err=True)
        sys.exit(1)
    
    return GitLabClient(config, logger), config


def resolve_ref(client, config, project, ref):
    """Pick the branch to work on: option, then config, then the project default."""
    ref = ref or config.ref or client.get_default_branch(project)
    if not ref:
        click.echo(f"Error: Could not determine the branch of {project}. Use --ref", err=True)
        sys.exit(1)
    return ref


@cli.command()
@click.option('--path', '-p', default='autobump.json', help='Path for the config file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)


@cli.command()
def version():
    """Show version information."""
    click.echo(f"Autobump version {__version__}")


cli.add_command(bump)
cli.add_command(insert)
cli.add_command(check)
cli.add_command(batch)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
