import enum


class DeploymentEnvironment(enum.Enum):
    Production = "production"
    Development = "development"
    Test = "test"
    Local = "local"


class FeedbackStrategy(enum.Enum):
    Comprehensive = "Comprehensive"
    PerTest = "Per Test"


class ThoroughnessMode(enum.Enum):
    Off = "Off"
    On = "On"


class FeedbackEvent(enum.Enum):
    AssistanceRequest = "assistance_request"
    ConceptualMutant = "conceptual_mutant"
    ThoroughnessMutant = "thoroughness_mutant"
    AmbiguousTest = "ambiguous_test"
    FileDownload = "file_download"


class TestKind(enum.Enum):
    __test__ = False

    Example = "example"
    Assertion = "assertion"
    Satisfiability = "satisfiability"
    TestExpect = "test-expect"


class TestPolarity(enum.Enum):
    __test__ = False

    Inclusion = "inclusion"
    Exclusion = "exclusion"
    Unknown = "unknown"
