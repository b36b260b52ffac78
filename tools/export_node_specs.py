import json
import pathlib
import sys

from yandexgpt_nodes.credentials import CREDENTIALS
from yandexgpt_nodes.registry import builtin_specs


def export(out_dir: pathlib.Path) -> list[pathlib.Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for spec in builtin_specs():
        path = out_dir / f"{spec.name}.json"
        path.write_text(json.dumps(spec.model_dump(), indent=2, ensure_ascii=False))
        written.append(path)
    for cred in CREDENTIALS.values():
        path = out_dir / f"{cred.name}.credentials.json"
        path.write_text(json.dumps(cred.model_dump(), indent=2, ensure_ascii=False))
        written.append(path)
    return written


if __name__ == "__main__":
    target = pathlib.Path(sys.argv[1] if len(sys.argv) > 1 else "generated_nodes/yandexgpt")
    paths = export(target)
    print(f"Exported {len(paths)} specs to {target}")
