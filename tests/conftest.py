import pytest

from echem_pipeline import ParsedData, TabularData, Technique


GAMRY_CV = (
    "EXPLAIN\n"
    "TAG\tCV\n"
    "TITLE\tLABEL\tCyclic Voltammetry\tTest &Identifier\n"
    "DATE\tLABEL\t1/1/2024\tDate\n"
    "\n"
    "CURVE\tTABLE\n"
    "\tPt\tT\tVf\tIm\tVu\n"
    "\t#\ts\tV vs. Ref.\tA\tV\n"
    "\t0\t0.0\t-0.5\t-1.0E-6\t0\n"
    "\t1\t0.1\t-0.4\t-0.5E-6\t0\n"
    "\t2\t0.2\t-0.3\tbad\t0\n"
)

MPT_CV = (
    "EC-Lab ASCII FILE\n"
    "Nb header lines : 6\n"
    "Cyclic Voltammetry\n"
    "Run on channel : 1\n"
    "Electrode surface area : 0,001 cm2\n"
    "mode\tEwe/V\t<I>/mA\tcycle number\n"
    "1\t0,1\t1,5\t1\n"
    "1\t0,2\t2,5\t1\n"
)

CSV_CV = "Ewe/V,I/mA\n0.1,1.0\n0.2,2.0\n0.3,abc\n"

CSV_EIS = (
    "Freq/Hz,Re(Z)/Ohm,-Im(Z)/Ohm,|Z|/Ohm,Phase(Z)/deg\n"
    "1000,10,-1,10.05,-5.7\n"
    "100,12,-3,12.37,-14\n"
    "10,15,-2,15.13,-7.6\n"
)

CSV_CYCLING = "Cycle,Capacity/mAh\n1,100\n2,98\n3,97\n"


@pytest.fixture
def gamry_cv_bytes():
    return GAMRY_CV.encode("utf-8")


@pytest.fixture
def mpt_cv_bytes():
    return MPT_CV.encode("latin-1")


@pytest.fixture
def csv_cv_bytes():
    return CSV_CV.encode("utf-8")


@pytest.fixture
def csv_eis_bytes():
    return CSV_EIS.encode("utf-8")


@pytest.fixture
def csv_cycling_bytes():
    return CSV_CYCLING.encode("utf-8")


@pytest.fixture
def ca_data():
    """Chronoamperometry table with one non-numeric cell."""
    return ParsedData(
        technique=Technique.CA,
        instrument="Generic",
        data=TabularData(
            columns=["Time/s", "Current/mA"],
            rows=[[0.0, 1.0], [1.0, "n/a"], [2.0, 0.5], ["", 0.25]],
        ),
        units={"Time": "s", "Current": "mA"},
    )
