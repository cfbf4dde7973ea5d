"""NairaTax: Nigerian PAYE estimates over selected months or a full year."""
