"""Field names of the SAP OData employee entity."""

EMPLOYEE_ID = "Employeeid"
EMPLOYEE_NAME = "Employeeename"
JOB_CODE = "Jobcode"
JOB_DESCRIPTION = "Jobdescription"
ORG_UNIT_CODE = "Orgunitcode"
ORG_UNIT_DESCRIPTION = "Orgunitdescription"
PERSONNEL_AREA_CODE = "Personnelareacode"
PERSONNEL_AREA_DESCRIPTION = "Personnelareadescr"
COST_CENTER_CODE = "Costcentercode"
COST_CENTER_DESCRIPTION = "Costcenterdescr"
COMPANY_CODE = "Companycode"
CONTRACTED_HOURS = "Contractedhours"
CONTRACT_START_DATE = "Contractstartdate"
CONTRACT_END_DATE = "Contractenddate"

METADATA_PATH = "$metadata"

# As-of date the rotation service filters its dated collection on
REFERENCE_DATE = "Keydate"

DEFAULT_ENTITY_SET = "TResultSet"

DEFAULT_SERVICE_URLS = {
    "salarios-nomina": "http://www.foscalodata.com/sap/opu/odata/sap/ZHCM_DATOS_NOMINA_SRV",
    "resumen-organizacional": "http://www.foscalodata.com/sap/opu/odata/sap/ZHCM_RESUMEN_ORG_SRV",
    "busqueda-avanzada": "http://www.foscalodata.com/sap/opu/odata/sap/ZHCM_BUSQUEDA_SRV",
}

# Backoff applied to retryable OData requests
RETRY_BACKOFF_BASE = 2.0
RETRY_MAX_DELAY_SECONDS = 60.0
