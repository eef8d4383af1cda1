"""
Backend Dental Clinic: pazienti, dentisti e turni su database relazionale.

Struttura:
- config.py       : impostazioni lette dall'ambiente (.env)
- db.py           : engine e sessioni SQLAlchemy (Database)
- models.py       : tabelle ORM
- domain.py       : entita' scambiate fra i livelli e in JSON
- store/          : SQL per entita' (mapping colonne, merge per PATCH)
- repositories.py : vincoli di unicita', lookup incrociati, transazioni
- services.py     : interfacce usate dagli handler e delega ai repository
- validation.py   : campi obbligatori, formato data e ora
- api/            : router FastAPI, envelope, token
- api_main.py     : composizione dell'applicazione
- client.py       : client HTTP per l'API
- cli.py          : comandi da terminale
"""
