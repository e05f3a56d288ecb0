import subprocess, sys, re


def test_cli_version_matches_package():
    proc = subprocess.run([sys.executable, '-m', 'streaminterp.cli', '--version'], capture_output=True, text=True)
    assert proc.returncode == 0
    out = (proc.stdout + proc.stderr).strip()
    # Expect something like: streaminterp X.Y.Z
    m = re.match(r'streaminterp\s+(\d+\.\d+\.\d+)', out)
    assert m, f'Unexpected version output: {out}'
    reported = m.group(1)
    import streaminterp
    assert reported == streaminterp.__version__, f"CLI version {reported} != package {streaminterp.__version__}"
