"""Compilation and discovery of gettext catalogs in a translation directory.

The layout is the one gettext expects: <directory>/<locale>/LC_MESSAGES/<domain>.po|.mo
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from babel.messages.mofile import write_mo
from babel.messages.pofile import read_po

# Setup logger
logger = logging.getLogger(__name__)


def compile_catalogs(directory: Union[str, Path], domain: str = 'messages', output_directory: Optional[Union[str, Path]] = None) -> List[Path]:
    """Compile every .po catalog of a translation directory into a .mo file.

    Args:
        directory: Translation directory containing the .po sources
        domain: gettext domain (catalog file name)
        output_directory: Where to write the compiled tree, the source directory if omitted

    Returns:
        Paths of the written .mo files
    """
    directory = Path(directory)
    output_directory = Path(output_directory) if output_directory is not None else directory

    if not directory.is_dir():
        raise FileNotFoundError(f"Translation directory does not exist: {directory}")

    compiled = []
    for po_path in sorted(directory.glob(f"*/LC_MESSAGES/{domain}.po")):
        locale = po_path.parent.parent.name
        mo_path = output_directory / locale / "LC_MESSAGES" / f"{domain}.mo"
        mo_path.parent.mkdir(parents=True, exist_ok=True)

        with open(po_path, 'rb') as po_file:
            catalog = read_po(po_file, domain=domain)

        with open(mo_path, 'wb') as mo_file:
            write_mo(mo_file, catalog)

        logger.info(f"Compiled {po_path} to {mo_path} ({len(catalog)} messages)")
        compiled.append(mo_path)

    if not compiled:
        logger.warning(f"No '{domain}.po' catalogs found in {directory}")

    return compiled


def available_locales(directory: Union[str, Path], domain: str = 'messages') -> List[str]:
    """List the locales having a compiled catalog in a translation directory"""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(mo_path.parent.parent.name for mo_path in directory.glob(f"*/LC_MESSAGES/{domain}.mo"))
