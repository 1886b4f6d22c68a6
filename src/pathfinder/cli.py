# --- CLI
import click
import colorama

from .config import build_config, load_config_file
from .core import run_directory_scan, run_subdomain_scan
from .errors import PathfinderError
from .filters import DEFAULT_MATCH_CODES
from .wordlists import parse_wordlist_option

colorama.just_fix_windows_console()

BANNER_TOP = r"""
  _____      _   _     __ _           _
 |  __ \    | | | |   / _(_)         | |
 | |__) |_ _| |_| |__| |_ _ _ __   __| | ___ _ __ """

BANNER_BOTTOM = r""" |  ___/ _` | __| '_ \  _| | '_ \ / _` |/ _ \ '__|
 | |  | (_| | |_| | | | | | | | | | (_| |  __/ |
 |_|   \__,_|\__|_| |_|_| |_|_| |_|\__,_|\___|_|
"""


def title(text: str) -> str:
    """Titre de section en bleu clair et gras."""
    return click.style(text, fg="bright_blue", bold=True)


def bad(text: str) -> str:
    return click.style(text, fg="red")


def print_banner() -> None:
    # moitié haute rouge, moitié basse grise
    click.echo(click.style(BANNER_TOP, fg="red"))
    click.echo(click.style(BANNER_BOTTOM, fg="bright_black"))


def _wordlists(values) -> dict:
    """-w répétable ; un marqueur déjà vu est remplacé par le dernier chemin."""
    out = {}
    for v in values:
        marker, path = parse_wordlist_option(v)
        out[marker] = path
    return out


def _file_values(config_path):
    return load_config_file(config_path) if config_path else {}


def _fail(e: PathfinderError):
    raise click.ClickException(bad(f"[-] {e}")) from e


def common_options(f):
    """Options partagées par sub et dir."""
    decorators = [
        click.option(
            "--url",
            "-u",
            "target",
            required=True,
            help="Cible avec marqueurs (ex: https://WL1.example.com)",
        ),
        click.option(
            "--wordlist",
            "-w",
            "wordlists",
            multiple=True,
            required=True,
            help="Wordlist au format /path:MARKER (ou /path seul pour WL1), répétable",
        ),
        click.option(
            "--threads", "-t", default=None, type=int, help="Nombre de workers (default 50)"
        ),
        click.option(
            "--rate-limit",
            "--rl",
            "rate_limit",
            default=None,
            type=int,
            help="Requêtes par seconde, tous workers confondus (default 10)",
        ),
        click.option(
            "--verbose", "-v", is_flag=True, default=False, help="Mode verbeux (logs DEBUG)"
        ),
        click.option("--output", "-o", default=None, help="Fichier de sortie (ajout)"),
        click.option(
            "--config",
            "config_path",
            default=None,
            type=click.Path(dir_okay=False),
            help="Fichier YAML de configuration (les options CLI priment)",
        ),
    ]
    for d in reversed(decorators):
        f = d(f)
    return f


@click.version_option("0.1.0", prog_name="pathfinder")
@click.group()
def main():
    """
    pathfinder – énumération de sous-domaines (DNS) et de chemins (HTTP) par wordlists
    """
    print_banner()


# ---------- SUB ----------
@main.command()
@common_options
@click.option(
    "--resolver", "-r", default=None, help="IP(s) de résolveur DNS (ex: 1.1.1.1,8.8.8.8)"
)
def sub(target, wordlists, threads, rate_limit, verbose, output, config_path, resolver):
    """
    Enumération de sous-domaines : chaque cible générée est résolue (A/AAAA).

    Sans marqueur dans l'URL, la wordlist WL1 est préfixée au domaine.
    """
    try:
        config = build_config(
            target,
            _wordlists(wordlists),
            options={
                "threads": threads,
                "rate_limit": rate_limit,
                "verbose": True if verbose else None,
                "output": output,
                "resolver": resolver,
            },
            file_values=_file_values(config_path),
        )
        click.echo(title("[ SUB ] Subdomain enumeration"))
        run_subdomain_scan(config)
    except PathfinderError as e:
        _fail(e)


# ---------- DIR ----------
@main.command(name="dir")
@common_options
@click.option(
    "--extensions", "-f", default=None, help="Extensions à tester (ex: 'php,html')"
)
@click.option(
    "--match-codes",
    "--mc",
    "match_codes",
    default=None,
    help=f"Codes HTTP retenus (default {','.join(str(c) for c in DEFAULT_MATCH_CODES)})",
)
@click.option("--filter-sizes", "--fs", "filter_sizes", default=None, help="Tailles à exclure")
@click.option("--filter-codes", "--fc", "filter_codes", default=None, help="Codes à exclure")
@click.option("--timeout", default=None, type=float, help="Timeout HTTP en secondes (default 10)")
@click.option(
    "--follow-redirects", is_flag=True, default=False, help="Suit les redirections HTTP"
)
@click.option("--user-agent", "-a", default=None, help="User-Agent personnalisé")
def dir_(
    target,
    wordlists,
    threads,
    rate_limit,
    verbose,
    output,
    config_path,
    extensions,
    match_codes,
    filter_sizes,
    filter_codes,
    timeout,
    follow_redirects,
    user_agent,
):
    """
    Enumération de chemins : GET sur chaque URL générée, filtrée par code / taille.

    Sans marqueur dans l'URL, les mots de WL1 sont ajoutés en fin de chemin.
    """
    try:
        config = build_config(
            target,
            _wordlists(wordlists),
            options={
                "threads": threads,
                "rate_limit": rate_limit,
                "verbose": True if verbose else None,
                "output": output,
                "extensions": extensions,
                "match_codes": match_codes,
                "filter_sizes": filter_sizes,
                "filter_codes": filter_codes,
                "timeout": timeout,
                "follow_redirects": True if follow_redirects else None,
                "user_agent": user_agent,
            },
            file_values=_file_values(config_path),
        )
        click.echo(title("[ DIR ] Directory enumeration"))
        run_directory_scan(config)
    except PathfinderError as e:
        _fail(e)
