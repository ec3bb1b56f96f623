import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from xdxf_index.database import init_db
from xdxf_index.services.dictionary import Dictionary


DICT_EXAMPLE = """<?xml version="1.0" encoding="UTF-8" ?>
<xdxf lang_from="POL" lang_to="RUS" format="visual">
    <full_name>Polish-Russian Dictionary</full_name>
    <description>Created by torkve, on the base of AndrewM's dictionary for SDictionary project</description>
    <abbreviations>
        <abr_def><k>f</k><v>rodzaj żeński</v></abr_def>
        <abr_def><k>m</k><v>rodzaj męski</v></abr_def>
        <abr_def><k>n</k><v>rodzaj nijaki</v></abr_def>
        <abr_def><k>rzecz.</k><v>rzeczownik</v></abr_def>
        <abr_def><k>przym.</k><v>przymiotnik</v></abr_def>
    </abbreviations>
    <ar><k>żółwi</k>
        żó<pos><abr>rzecz.</abr></pos>łw <i><abr>m</abr></i>
        черепаха <i><abr>f</abr></i>
        żó<pos><abr>przym.</abr></pos>łwi
        черепашечный
         <small><i>Biologiczny Przenośny</i></small> черепаший</ar>
    <ar><k>żółwica</k>
        żó<pos><abr>rzecz.</abr></pos>łwica <i><abr>f</abr></i>
        черепаха <i><abr>f</abr></i></ar>
</xdxf>
"""

ZOLWI_CONTENT = (
    "żółw<span class='partofspeech'><acronym title='rzeczownik'>rzecz.</acronym></span>"
    "<i><acronym title='rodzaj męski'>m</acronym></i>"
    "<br/>черепаха <i><acronym title='rodzaj żeński'>f</acronym></i>"
    "<br/>żółwi<span class='partofspeech'><acronym title='przymiotnik'>przym.</acronym></span>"
    "<br/>черепашечный"
    "<br/><small><i>Biologiczny Przenośny</i></small> черепаший"
)

ZOLWICA_CONTENT = (
    "żółwica<span class='partofspeech'><acronym title='rzeczownik'>rzecz.</acronym></span>"
    "<i><acronym title='rodzaj żeński'>f</acronym></i>"
    "<br/>черепаха <i><acronym title='rodzaj żeński'>f</acronym></i>"
)


def xdxf(body: str, abbreviations: str = "") -> str:
    block = f"<abbreviations>{abbreviations}</abbreviations>" if abbreviations else ""
    return f'<?xml version="1.0" encoding="UTF-8" ?>\n<xdxf>{block}{body}</xdxf>\n'


@pytest.fixture
def dictionary() -> Dictionary:
    return Dictionary.load_text(DICT_EXAMPLE)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "pol-rus.xdxf"
    path.write_text(DICT_EXAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
