import click
from pathlib import Path

from fastlocale.catalogs import available_locales, compile_catalogs
from fastlocale.config import ConfigurationError, LocaleConfig


@click.group()
def catalogs():
    """Compile and inspect translation catalogs."""
    pass

@catalogs.command("compile")
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--domain", "-d", default="messages", show_default=True, help="gettext domain of the catalogs")
@click.option("--output", "-o", type=click.Path(file_okay=False, path_type=Path), help="Write compiled catalogs to this directory instead")
def catalogs_compile(directory, domain, output):
    """Compile <locale>/LC_MESSAGES/<domain>.po files of DIRECTORY into .mo files."""

    compiled = compile_catalogs(directory, domain=domain, output_directory=output)

    if not compiled:
        click.echo(f"⚠ No '{domain}.po' catalogs found in {directory}")
        return

    for mo_path in compiled:
        click.echo(f"✓ Compiled {mo_path}")

@catalogs.command("check")
@click.option("--locales", "-l", help="Comma-separated locale codes, defaults to $LOCALES")
@click.option("--directory", type=click.Path(file_okay=False, path_type=Path), help="Translation directory, defaults to $LOCALES_DIRECTORY")
@click.option("--default-locale", help="Default locale, defaults to $DEFAULT_LOCALE or the first locale")
@click.option("--domain", "-d", help="gettext domain, defaults to $LOCALE_DOMAIN or 'messages'")
def catalogs_check(locales, directory, default_locale, domain):
    """Validate the locale configuration and report missing catalogs."""

    try:
        config = LocaleConfig.from_env(
            locales=[code.strip() for code in locales.split(',') if code.strip()] if locales else None,
            directory=directory,
            default_locale=default_locale,
            domain=domain,
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    click.echo(f"Default locale: {config.resolved_default_locale}")

    if config.directory is None:
        click.echo("⚠ No translation directory configured")
        return

    compiled = available_locales(config.directory, config.domain)
    missing = 0
    for locale in config.locales:
        if locale in compiled:
            click.echo(f"✓ {locale}")
        else:
            missing += 1
            click.echo(f"⚠ {locale}: no compiled '{config.domain}' catalog in {config.directory}")

    if missing:
        click.echo(f"{missing} of {len(config.locales)} locales have no catalog")
