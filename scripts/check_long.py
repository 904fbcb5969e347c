from pathlib import Path

root = Path(__file__).resolve().parents[1]
files = sorted(
    list((root / 'recipebox').glob('*.py'))
    + list((root / 'scripts').glob('*.py'))
    + list((root / 'tests').glob('*.py'))
)
for f in files:
    with open(f, 'r', encoding='utf-8') as fh:
        for i, l in enumerate(fh, start=1):
            line = l.rstrip('\n')
            ln = len(line)
            if ln > 99:
                print(f"{f.relative_to(root)}:{i}:{ln}: {line}")
