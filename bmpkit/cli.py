"""Interactive menu for editing an 8-bit BMP image."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import IO

from .bmp8 import Bmp8Error, Bmp8Image, choose_filter, get_kernel, load_image
from .utils import open_image_file

DEFAULT_SAVE_PATH = "images/image_modifiee.bmp"

_MENU = (
    "\n===== MENU =====\n"
    "1. Afficher les informations de l'image\n"
    "2. Appliquer un filtre négatif\n"
    "3. Modifier la luminosité\n"
    "4. Appliquer un seuillage\n"
    "5. Appliquer un filtre de convolution\n"
    "6. Sauvegarder l'image\n"
    "7. Ouvrir l'image\n"
    "0. Quitter\n"
    "Votre choix : "
)


def _ask(prompt: str, stdin: IO[str], stdout: IO[str]) -> str:
    """Write ``prompt`` and return the next stripped line; raise EOFError at end of input."""
    stdout.write(prompt)
    stdout.flush()
    line = stdin.readline()
    if not line:
        raise EOFError
    return line.strip()


def _ask_int(prompt: str, stdin: IO[str], stdout: IO[str]) -> int | None:
    try:
        return int(_ask(prompt, stdin, stdout))
    except ValueError:
        return None


def _save(image: Bmp8Image, path: str, stdout: IO[str]) -> bool:
    try:
        image.save(path)
    except Bmp8Error as exc:
        stdout.write(f"Echec de l'écriture dans le fichier : {exc}\n")
        return False
    return True


def run_menu(
    image: Bmp8Image,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    save_path: str = DEFAULT_SAVE_PATH,
) -> None:
    """Run the editing menu on ``image`` until the user quits or input ends."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    try:
        while True:
            choice = _ask_int(_MENU, stdin, stdout)
            if choice == 0:
                stdout.write("Fermeture du programme.\n")
                return
            if choice == 1:
                image.print_info(stdout)
            elif choice == 2:
                image.negative()
                if _save(image, save_path, stdout):
                    stdout.write(f"Filtre négatif appliqué et sauvegardé dans {save_path}.\n")
            elif choice == 3:
                value = _ask_int("Entrez une valeur de luminosité (-255 à 255) : ", stdin, stdout)
                if value is None:
                    stdout.write("Valeur invalide.\n")
                    continue
                image.brightness(value)
                if _save(image, save_path, stdout):
                    stdout.write(f"Luminosité modifiée et image sauvegardée dans {save_path}.\n")
            elif choice == 4:
                level = _ask_int("Entrez le seuil (0 à 255) : ", stdin, stdout)
                if level is None:
                    stdout.write("Valeur invalide.\n")
                    continue
                image.threshold(level)
                if _save(image, save_path, stdout):
                    stdout.write(f"Seuillage appliqué et image sauvegardée dans {save_path}.\n")
            elif choice == 5:
                kernel = get_kernel(choose_filter(stdin, stdout))
                image.apply_filter(kernel)
                if _save(image, save_path, stdout):
                    stdout.write(
                        f"Filtre de convolution appliqué et sauvegardé dans {save_path}.\n"
                    )
            elif choice == 6:
                target = _ask("Nom du fichier de sortie : ", stdin, stdout)
                if _save(image, target, stdout):
                    stdout.write("Image sauvegardée.\n")
            elif choice == 7:
                open_image_file(save_path)
            else:
                stdout.write("Choix invalide. Veuillez réessayer.\n")
    except EOFError:
        return


def main(argv: list[str] | None = None) -> int:
    """Load an 8-bit BMP image and run the editing menu on it."""
    parser = argparse.ArgumentParser(prog="bmpkit", description="Edit an 8-bit BMP image.")
    parser.add_argument("image", nargs="?", help="path of the image to load")
    parser.add_argument(
        "-o", "--output", default=DEFAULT_SAVE_PATH, help="where modified images are saved"
    )
    args = parser.parse_args(argv)

    path = args.image
    if path is None:
        try:
            path = _ask("Entrez le nom de l'image BMP à charger : ", sys.stdin, sys.stdout)
        except EOFError:
            path = ""
    try:
        image = load_image(Path(path))
    except Bmp8Error:
        sys.stdout.write("Erreur lors du chargement de l'image.\n")
        return 1

    run_menu(image, sys.stdin, sys.stdout, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())