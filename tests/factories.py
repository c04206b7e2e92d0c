import io
import json
import zipfile
from pathlib import Path

PACKAGE_JSON = {
    "name": "pc-template",
    "version": "0.0.0",
    "private": True,
    "scripts": {"dev": "vite", "build": "vue-tsc && vite build"},
    "dependencies": {"vue": "^3.4.0", "pinia": "^2.1.0"},
}

STORE_MODULE = """import { defineStore } from 'pinia'

export const useCommonStore = defineStore('common', {
  state: () => ({ collapsed: false }),
  persist: {
    key: 'pc-template',
    storage: localStorage,
  },
})
"""

INDEX_HTML = """<!DOCTYPE html>
<html lang="zh-CN">
  <head>
    <meta charset="UTF-8" />
    <TITLE>PC Template</TITLE>
  </head>
  <body>
    <div id="app"></div>
    <script type="module" src="/src/main.ts"></script>
  </body>
</html>
"""

README = "# pc-preset-vue\n"

def write_template(root: Path, manifest: str = None) -> Path:
    """Write a fake copy of the PC preset template into `root`."""
    (root / "src" / "stores" / "modules").mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(
        manifest if manifest is not None else json.dumps(PACKAGE_JSON, indent=2) + "\n",
        encoding="utf-8",
    )
    (root / "src" / "stores" / "modules" / "common.ts").write_text(STORE_MODULE, encoding="utf-8")
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "README.md").write_text(README, encoding="utf-8")
    return root

def make_archive(root: Path, prefix: str = "pc-preset-vue-main") -> bytes:
    """Zip `root` the way repository hosts do, wrapped in a top-level directory."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr(f"{prefix}/", "")
        for path in sorted(root.rglob("*")):
            name = f"{prefix}/{path.relative_to(root).as_posix()}"
            if path.is_dir():
                zf.writestr(name + "/", "")
            else:
                zf.write(path, name)
    return buf.getvalue()
