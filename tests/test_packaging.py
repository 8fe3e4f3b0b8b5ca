import ast
import pathlib


def setup_keywords():
    path = pathlib.Path(__file__).resolve().parent.parent / "setup.py"
    tree = ast.parse(path.read_text())
    call = next(
        node
        for node in ast.walk(tree)
        if isinstance(node, ast.Call) and getattr(node.func, "attr", None) == "setup"
    )
    return {kw.arg: kw.value for kw in call.keywords}


def test_setup_metadata():
    kws = setup_keywords()
    assert ast.literal_eval(kws["name"]) == "polyrep"
    for name, value in kws.items():
        if isinstance(value, ast.Constant):
            assert value.value != "", f"{name} is empty"
    assert ast.literal_eval(kws["install_requires"]) == ["numpy", "python-flint", "pplpy"]
